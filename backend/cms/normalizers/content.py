def normalize_content(content):
    """
    Plain data for a page's content.

    Groups become dicts, repeatable groups lists of dicts and multiple
    value fields dicts keyed by value key.
    """
    return {name: slot.get_value() for name, slot in content}
