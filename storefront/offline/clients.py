from typing import Dict, List, Optional


class Notification:
    def __init__(self, title: str, options: Dict):
        self.title = title
        self.options = options
        self.closed = False

    def close(self):
        self.closed = True


class Clients:
    """
    Client contexts controlled by the worker, as seen from the worker side.
    Records what the worker asked for; a real host would forward these calls.
    """

    def __init__(self):
        self.claimed = False
        self.opened: List[str] = []
        self.notifications: List[Notification] = []

    async def claim(self) -> None:
        self.claimed = True

    async def open_window(self, url: str) -> None:
        self.opened.append(url)

    async def show_notification(self, title: str, options: Optional[Dict] = None) -> Notification:
        n = Notification(title, options or {})
        self.notifications.append(n)
        return n
