"""
Mutation state for one-shot remote actions (verify, redeem).

A Mutation wraps a callable and records the outcome of the latest call so a
UI can render idle / pending / success / error without tracking it itself.
"""
import enum
import logging
from typing import Any, Callable, Optional

from .api import GiftApiError, GiftOrdersClient

logger = logging.getLogger(__name__)


class MutationStatus(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class Mutation:
    def __init__(
        self,
        fn: Callable[..., Any],
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        on_settled: Optional[Callable[[Any, Optional[Exception]], None]] = None,
    ):
        self.fn = fn
        self.on_success = on_success
        self.on_error = on_error
        self.on_settled = on_settled
        self.reset()

    def reset(self):
        """Back to idle, forgetting the last result."""
        self.status = MutationStatus.IDLE
        self.data = None
        self.error: Optional[Exception] = None

    @property
    def is_pending(self) -> bool:
        return self.status == MutationStatus.PENDING

    @property
    def is_success(self) -> bool:
        return self.status == MutationStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == MutationStatus.ERROR

    def mutate(self, *args, **kwargs):
        """
        Run the wrapped callable.

        API errors are recorded on ``self.error`` and passed to ``on_error``
        without raising; returns the result, or None on failure. Any other
        exception is recorded and re-raised.
        """
        self.status = MutationStatus.PENDING
        self.error = None
        try:
            result = self.fn(*args, **kwargs)
        except GiftApiError as e:
            self.status = MutationStatus.ERROR
            self.data = None
            self.error = e
            if self.on_error:
                self.on_error(e)
            if self.on_settled:
                self.on_settled(None, e)
            return None
        except Exception as e:
            # programming errors are recorded but not swallowed
            self.status = MutationStatus.ERROR
            self.data = None
            self.error = e
            raise

        self.status = MutationStatus.SUCCESS
        self.data = result
        if self.on_success:
            self.on_success(result)
        if self.on_settled:
            self.on_settled(result, None)
        return result

    def mutate_or_raise(self, *args, **kwargs):
        """Like ``mutate`` but re-raises the recorded error."""
        result = self.mutate(*args, **kwargs)
        if self.error is not None:
            raise self.error
        return result


def use_verify_gift(client: GiftOrdersClient, **callbacks) -> Mutation:
    return Mutation(client.verify_gift, **callbacks)


def use_redeem_gift(client: GiftOrdersClient, **callbacks) -> Mutation:
    return Mutation(client.redeem_gift, **callbacks)
