from typing import Dict, Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from stores.models import User
from utils.logger import get_logger
from utils.messages import ModeSwitchedMessage, QuitRequestedMessage, UserLogoutMessage
from utils.state import AppState
from views.scr_cart import CartScreen
from views.scr_catalog import CatalogScreen
from views.scr_dashboard import DashboardScreen
from views.scr_login import LoginScreen
from views.scr_orders import OrdersScreen

_logger = get_logger(__name__)


class ShopEaseApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "catalog": CatalogScreen,
        "cart": CartScreen,
        "orders": OrdersScreen,
        "dashboard": DashboardScreen,
    }

    MENU_LABELS = {
        "catalog": "Shop",
        "cart": "Cart",
        "orders": "My Orders",
        "dashboard": "Admin Dashboard",
    }
    ADMIN_MODES = {"dashboard"}

    CSS = """
    Sidebar {
        dock: left;
        width: 30;
        padding: 0 1;
    }
    #div-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $primary;
    }
    DialogModal, ProdDetailModal, CheckoutModal {
        align: center middle;
    }
    .-invalid {
        border: tall $error;
    }
    """

    state: Optional[AppState]

    def __init__(self, state: Optional[AppState] = None):
        super().__init__()
        self.state = state

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    def menu_for(self, user: User) -> Dict[str, str]:
        return {
            k: v
            for k, v in self.MENU_LABELS.items()
            if k not in self.ADMIN_MODES or user.is_admin
        }

    async def on_mount(self) -> None:
        if self.state is None:
            self.state = await AppState.open()
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        await self.state.session.logout()
        self.notify("Logout successful.")
        self.main_flow()

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.exit()

    @work
    async def main_flow(self):
        if not self.state.session.is_authenticated:
            await self.push_screen_wait(LoginScreen())

        user = self.state.session.user
        _logger.info(f"Session ready for {user.email} ({user.role.value})")
        new_mode = "dashboard" if user.is_admin else "catalog"
        self.post_message(ModeSwitchedMessage(self.current_mode, new_mode))
        await self.switch_mode(new_mode)


if __name__ == "__main__":
    app = ShopEaseApp()
    app.run()
