from cms.domain.exceptions import ConfigurationError


class PageType:
    """
    A named content schema.

    Subclasses set ``name`` and register their fields in ``set_fields``::

        class Blog(PageType):
            name = "blog"

            def set_fields(self, factory):
                factory.add_field("text", "intro", "Intro").max_length(255)
                factory.add_group("images", "Images").set_repeatable()
    """

    name = None
    description = ""

    def get_name(self):
        return self.name

    def get_description(self):
        return self.description

    def set_fields(self, factory):
        pass

    def __repr__(self):
        return f"<PageType {self.name}>"


class PageTypeCollection:
    def __init__(self, page_types=()):
        self._types = {}
        for page_type in page_types:
            self.add(page_type)

    def add(self, page_type):
        if not page_type.get_name():
            raise ConfigurationError(f"Page type `{type(page_type).__name__}` has no name")
        self._types[page_type.get_name().lower()] = page_type
        return self

    def get(self, name):
        page_type = self._types.get((name or "").lower())
        if page_type is None:
            raise ConfigurationError(f"Page type `{name}` is not registered")
        return page_type

    def __contains__(self, name):
        return (name or "").lower() in self._types

    def __iter__(self):
        return iter(self._types.values())

    def __len__(self):
        return len(self._types)
