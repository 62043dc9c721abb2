from cms.utils.dates import utcnow


class Authorisation:
    """
    Decides whether a loaded page is published and whether a user may view it.

    Access levels are compared after the loader has resolved inheritance,
    so ``page.access`` is never negative here.
    """

    INHERIT = -100
    ALL = 0
    GUEST = 100
    USER = 200
    GROUP = 300

    def is_published(self, page, when=None):
        return page.publish_date_range.is_in_range(when or utcnow())

    def is_viewable(self, page, user):
        if page.access <= self.ALL:
            return True

        if page.access < self.USER:
            return user.is_guest

        if user.is_guest:
            return False

        if page.access < self.GROUP:
            return True

        return any(user.in_group(name) for name in page.access_groups)
