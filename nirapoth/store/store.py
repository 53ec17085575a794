from typing import Callable, Dict, List, Optional

from nirapoth.core.feedback import FeedbackChannel
from nirapoth.services.accident_service import AccidentApi
from nirapoth.services.analytics_service import AnalyticsApi
from nirapoth.services.api_client import ApiClient
from nirapoth.services.camera_service import CameraApi
from nirapoth.services.debt_service import DebtApi
from nirapoth.services.fine_service import FineApi
from nirapoth.services.notification_service import NotificationApi
from nirapoth.services.payment_service import PaymentApi
from nirapoth.services.report_service import CitizenReportApi
from nirapoth.services.reward_service import RewardApi
from nirapoth.services.violation_service import ViolationApi
from nirapoth.store.accidents import AccidentsSlice
from nirapoth.store.actions import Action
from nirapoth.store.analytics import AnalyticsSlice
from nirapoth.store.cameras import CamerasSlice
from nirapoth.store.debts import DebtSlice
from nirapoth.store.fines import FinesSlice
from nirapoth.store.notifications import NotificationsSlice
from nirapoth.store.payments import PaymentsSlice
from nirapoth.store.reports import ALL, PENDING_APPEALS, ReportsSlice, scope_for_role
from nirapoth.store.rewards import RewardsSlice
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.state import ResourceState
from nirapoth.store.violations import ViolationsSlice

StoreListener = Callable[[str, ResourceState, Action], None]


class Store:
    """Every resource slice for one signed-in session."""

    def __init__(self, client: ApiClient, feedback: Optional[FeedbackChannel] = None,
                 report_scope: Optional[str] = None, limit: Optional[int] = None):
        self.client = client
        self.feedback = feedback or FeedbackChannel()
        reports_api = CitizenReportApi(client)
        scope = report_scope or scope_for_role(client.credentials.role)

        self.reports = ReportsSlice(reports_api, self.feedback, scope=scope, limit=limit)
        self.appeals = ReportsSlice(reports_api, self.feedback, scope=PENDING_APPEALS, limit=limit)
        self.violations = ViolationsSlice(ViolationApi(client), self.feedback, limit)
        self.fines = FinesSlice(FineApi(client), self.feedback, limit)
        self.payments = PaymentsSlice(PaymentApi(client), self.feedback, limit)
        self.notifications = NotificationsSlice(NotificationApi(client), self.feedback, limit)
        self.accidents = AccidentsSlice(AccidentApi(client), self.feedback, limit)
        self.cameras = CamerasSlice(CameraApi(client), self.feedback, limit)
        self.analytics = AnalyticsSlice(AnalyticsApi(client), self.feedback, limit)
        self.rewards = RewardsSlice(RewardApi(client), self.feedback, limit, admin=scope == ALL)
        self.debts = DebtSlice(DebtApi(client), self.feedback, limit)

    @property
    def slices(self) -> Dict[str, ResourceSlice]:
        return {
            "reports": self.reports,
            "appeals": self.appeals,
            "violations": self.violations,
            "fines": self.fines,
            "payments": self.payments,
            "notifications": self.notifications,
            "accidents": self.accidents,
            "cameras": self.cameras,
            "analytics": self.analytics,
            "rewards": self.rewards,
            "debts": self.debts,
        }

    def get_state(self) -> Dict[str, ResourceState]:
        return {name: slice_.state for name, slice_ in self.slices.items()}

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        unsubscribers: List[Callable[[], None]] = []
        for name, slice_ in self.slices.items():
            unsubscribers.append(slice_.subscribe(
                lambda state, action, name=name: listener(name, state, action)
            ))

        def unsubscribe() -> None:
            for fn in unsubscribers:
                fn()

        return unsubscribe
