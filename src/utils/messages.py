from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLoginMessage(Message):
    """
    Fired after login or signup succeeds, so screens can refresh
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    Fired by the sidebar when the user confirms logging out
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired whenever a cart line is added, changed or removed.
    Post at App level when sending from a modal.
    """

    bubble = True


class NewOrderMessage(Message):
    """
    Fired after checkout creates an order.
    Listened to by the orders and dashboard screens.
    """

    bubble = True

    def __init__(self, order_id: str) -> None:
        super().__init__()
        self.order_id = order_id


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
