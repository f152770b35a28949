from __future__ import annotations

import asyncio
import json
from enum import Enum
from typing import Awaitable, Callable, Iterable, List, Optional

from stores import seed
from stores.errors import (
    AuthenticationInProgress,
    EmailAlreadyRegistered,
    InvalidCredentials,
    PersistedDataCorrupt,
    StoreError,
)
from stores.models import Account, Role, User, user_from_dict, user_to_dict
from stores.snapshot import MemorySnapshotStore, SnapshotStore
from utils.logger import get_logger

_logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class SessionStore:
    """
    Current identity of the app, plus the mock account registry it checks against.

    login and signup wait `delay` seconds through the injected `sleep` to stand in
    for a network round trip. While one of them is in flight the store is
    AUTHENTICATING and a second call raises AuthenticationInProgress.
    """

    def __init__(
        self,
        snapshot: Optional[SnapshotStore] = None,
        accounts: Optional[Iterable[Account]] = None,
        delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self._snapshot = snapshot or MemorySnapshotStore()
        self._accounts: List[Account] = list(
            seed.ACCOUNTS if accounts is None else accounts
        )
        self._delay = delay
        self._sleep = sleep

        self.user: Optional[User] = None
        self.state = SessionState.ANONYMOUS
        self.error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED and self.user is not None

    @property
    def is_loading(self) -> bool:
        return self.state == SessionState.AUTHENTICATING

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user.role == Role.ADMIN

    @property
    def account_count(self) -> int:
        return len(self._accounts)

    async def restore(self) -> Optional[User]:
        """Pick up the identity saved by a previous run, if it is readable."""
        blob = await self._snapshot.load()
        if blob is None:
            return None
        try:
            user = user_from_dict(json.loads(blob))
        except (json.JSONDecodeError, PersistedDataCorrupt) as e:
            _logger.warning(f"Discarding unreadable session snapshot: {e}")
            await self._snapshot.clear()
            return None
        self.user = user
        self.state = SessionState.AUTHENTICATED
        _logger.debug(f"Restored session for {user.email}")
        return user

    # ---------------------------
    # Auth
    # ---------------------------

    def _begin(self) -> SessionState:
        if self.state == SessionState.AUTHENTICATING:
            raise AuthenticationInProgress()
        prev = self.state
        self.state = SessionState.AUTHENTICATING
        self.error = None
        return prev

    async def _fail(self, err: StoreError) -> None:
        self.user = None
        self.state = SessionState.ANONYMOUS
        self.error = err.message
        await self._snapshot.clear()

    async def _settle(self, user: User) -> User:
        await self._snapshot.save(json.dumps(user_to_dict(user)))
        self.user = user
        self.state = SessionState.AUTHENTICATED
        return user

    def _next_user_id(self) -> str:
        """One past the largest numeric id in use, skipping any id already taken."""
        taken = {a.user.id for a in self._accounts}
        numeric = [int(i) for i in taken if i.isdigit()]
        cand = max(numeric, default=0) + 1
        while str(cand) in taken:
            cand += 1
        return str(cand)

    async def login(self, email: str, password: str) -> User:
        """
        Log in with an exact (email, password) match.
        Raises InvalidCredentials and leaves the session anonymous otherwise.
        """
        prev = self._begin()
        try:
            await self._sleep(self._delay)
            account = next(
                (
                    a
                    for a in self._accounts
                    if a.user.email == email and a.password == password
                ),
                None,
            )
            if account is None:
                raise InvalidCredentials()
        except InvalidCredentials as e:
            _logger.warning(f"Failed login for {email}")
            await self._fail(e)
            raise
        except BaseException:
            self.state = prev
            raise

        _logger.info(f"{account.user.email} logged in")
        return await self._settle(account.user)

    async def signup(self, name: str, email: str, password: str) -> User:
        """
        Register a new ordinary account and log it in.

        Raises EmailAlreadyRegistered when the email is taken (exact match).
        A refused signup only records the error; whoever was logged in stays
        logged in and the saved session is untouched.
        """
        prev = self._begin()
        try:
            await self._sleep(self._delay)
            if any(a.user.email == email for a in self._accounts):
                raise EmailAlreadyRegistered()
        except EmailAlreadyRegistered as e:
            _logger.warning(f"Signup refused, {email} already registered")
            self.state = prev
            self.error = e.message
            raise
        except BaseException:
            self.state = prev
            raise

        user = User(id=self._next_user_id(), name=name, email=email, role=Role.USER)
        self._accounts.append(Account(user=user, password=password))
        _logger.info(f"Registered {email} as user {user.id}")
        return await self._settle(user)

    async def logout(self) -> None:
        if self.user is not None:
            _logger.info(f"{self.user.email} logged out")
        self.user = None
        self.state = SessionState.ANONYMOUS
        self.error = None
        await self._snapshot.clear()
