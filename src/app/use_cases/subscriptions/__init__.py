from .create_subscription import CreateSubscription
from .get_subscription import GetSubscription, ListSubscriptions
from .update_subscription import UpdateSubscription, ReplaceSubscriptionSchedule
from .change_status import PauseSubscription, ResumeSubscription, CancelSubscription
from .delete_subscription import DeleteSubscription
from .dtos import (
    ScheduleItemDTO,
    CreateSubscriptionCommandDTO,
    UpdateSubscriptionCommandDTO,
    ReplaceScheduleCommandDTO,
    ScheduleItemResponseDTO,
    SubscriptionResponseDTO,
    SubscriptionListResponseDTO,
)

__all__ = [
    "CreateSubscription",
    "GetSubscription",
    "ListSubscriptions",
    "UpdateSubscription",
    "ReplaceSubscriptionSchedule",
    "PauseSubscription",
    "ResumeSubscription",
    "CancelSubscription",
    "DeleteSubscription",
    "ScheduleItemDTO",
    "CreateSubscriptionCommandDTO",
    "UpdateSubscriptionCommandDTO",
    "ReplaceScheduleCommandDTO",
    "ScheduleItemResponseDTO",
    "SubscriptionResponseDTO",
    "SubscriptionListResponseDTO",
]
