from blinker import Namespace

_signals = Namespace()

#: Sent after a page has been saved. Receivers get a ``PageEvent`` as the
#: ``event`` keyword and may replace ``event.page``.
page_edited = _signals.signal("page-edited")


class PageEvent:
    def __init__(self, page):
        self.page = page

    def get_page(self):
        return self.page

    def set_page(self, page):
        self.page = page
