from cms.utils.dates import to_timestamp


def _iso(value):
    return value.isoformat() if value is not None else None


def normalize_page(page, admin=False):
    data = {
        "id": page.id,
        "title": page.title,
        "type": page.type.get_name() if page.type is not None else None,
        "slug": str(page.slug),
        "is_homepage": page.is_homepage(),
        "has_children": page.has_children(),
        "depth": page.depth,
        "tags": list(page.tags),
        "meta": {
            "title": page.meta_title,
            "description": page.meta_description,
        },
        "publish_at": _iso(page.publish_date_range.get_start()),
        "unpublish_at": _iso(page.publish_date_range.get_end()),
        "visibility": {
            "search": page.visibility_search,
            "menu": page.visibility_menu,
            "aggregator": page.visibility_aggregator,
        },
    }

    if admin:
        authorship = page.authorship
        data["position"] = {"left": page.left, "right": page.right, "depth": page.depth}
        data["access"] = page.access
        data["access_inherited"] = page.access_inherited
        data["access_groups"] = sorted(page.access_groups)
        data["password_protected"] = bool(page.password)
        data["authorship"] = {
            "created_at": to_timestamp(authorship.created_at),
            "created_by": authorship.created_by,
            "updated_at": to_timestamp(authorship.updated_at),
            "updated_by": authorship.updated_by,
            "deleted_at": to_timestamp(authorship.deleted_at),
            "deleted_by": authorship.deleted_by,
        }
        data["comments"] = {
            "enabled": page.comments_enabled,
            "access": page.comments_access,
            "approval": page.comments_approval,
        }

    return data
