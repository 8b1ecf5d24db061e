from __future__ import annotations

from dataclasses import dataclass

from webmonitor.adapters.http_api import HttpAlertsApi
from webmonitor.adapters.timers import ThreadingScheduler
from webmonitor.components.drafts import LimitBounds
from webmonitor.ports.api import AlertsApiPort
from webmonitor.ports.storage import TokenStoragePort
from webmonitor.ports.ui import NavigatorPort, SchedulerPort
from webmonitor.rules.models import Rules
from webmonitor.services.session import SessionStore
from webmonitor.ui.state import AppState


@dataclass
class ServiceContext:
    rules: Rules
    state: AppState
    storage: TokenStoragePort
    api: AlertsApiPort
    session: SessionStore
    scheduler: SchedulerPort

    @property
    def limit_bounds(self) -> LimitBounds:
        return LimitBounds(
            minimum=self.rules.projects.limit_min,
            maximum=self.rules.projects.limit_max,
        )

    def close(self) -> None:
        self.api.close()

    @classmethod
    def create(
        cls,
        rules: Rules,
        storage: TokenStoragePort,
        navigator: NavigatorPort | None = None,
        *,
        api: AlertsApiPort | None = None,
        scheduler: SchedulerPort | None = None,
    ) -> ServiceContext:
        token_key = rules.storage.token_key
        if api is None:
            api = HttpAlertsApi(rules.api.base_url, storage, token_key=token_key)

        state = AppState()
        session = SessionStore(state, api, storage, navigator=navigator, token_key=token_key)

        return cls(
            rules=rules,
            state=state,
            storage=storage,
            api=api,
            session=session,
            scheduler=scheduler or ThreadingScheduler(),
        )
