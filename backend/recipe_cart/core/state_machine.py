import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..models.grocery import GroceryItem
from ..services.grocery_client import TRANSPORT_ERROR_MESSAGE, GroceryClient, GroceryClientError

log = logging.getLogger(__name__)

EMPTY_RECIPE_MESSAGE = "Please enter a recipe"


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class ControllerState(BaseModel):
    """
    Everything the page shows, as one value. `request_id` identifies the
    submission currently in flight so late replies can be recognised.
    """

    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    groceries: List[GroceryItem] = []
    error: Optional[str] = None
    notice: Optional[str] = None
    request_id: int = 0

    @model_validator(mode="after")
    def check_phase_fields(self) -> "ControllerState":
        if self.groceries and self.phase != Phase.SUCCESS:
            raise ValueError("groceries are only kept in the success phase")
        if self.error is not None and self.phase != Phase.FAILED:
            raise ValueError("error is only kept in the failed phase")
        if self.phase == Phase.FAILED and self.error is None:
            raise ValueError("failed phase requires an error message")
        return self


def begin_submission(state: ControllerState, text: str) -> ControllerState:
    if state.phase == Phase.SUBMITTING:
        return state
    if not text.strip():
        return state.model_copy(update={"notice": EMPTY_RECIPE_MESSAGE})
    return ControllerState(phase=Phase.SUBMITTING, request_id=state.request_id + 1)


def receive_groceries(state: ControllerState, request_id: int, groceries: List[GroceryItem]) -> ControllerState:
    if state.phase != Phase.SUBMITTING or request_id != state.request_id:
        return state
    return ControllerState(phase=Phase.SUCCESS, groceries=list(groceries), request_id=request_id)


def receive_error(state: ControllerState, request_id: int, message: str) -> ControllerState:
    if state.phase != Phase.SUBMITTING or request_id != state.request_id:
        return state
    return ControllerState(phase=Phase.FAILED, error=message, request_id=request_id)


class SubmissionController:
    """
    Drives the recipe form: one outbound call per accepted submission,
    and a render callback for every state the user should see.
    """

    def __init__(
        self,
        send: Optional[Callable[[str], Awaitable[List[GroceryItem]]]] = None,
        render: Optional[Callable[[ControllerState], Awaitable[None]]] = None,
    ):
        self.send = send or GroceryClient().fetch_groceries
        self.render = render
        self.state = ControllerState()

    async def _show(self, state: ControllerState) -> None:
        self.state = state
        if self.render is not None:
            await self.render(state)

    async def submit(self, text: str) -> ControllerState:
        started = begin_submission(self.state, text)
        if started.phase != Phase.SUBMITTING or started.request_id == self.state.request_id:
            log.info("Submission rejected before sending")
            if started is not self.state:
                await self._show(started)
            return self.state

        await self._show(started)
        request_id = started.request_id

        try:
            groceries = await self.send(text)
        except GroceryClientError as e:
            log.warning(f"❌ Submission {request_id} failed: {e.message}")
            finished = receive_error(self.state, request_id, e.message)
        except Exception as e:
            log.error(f"💥 Submission {request_id} failed unexpectedly: {e}")
            finished = receive_error(self.state, request_id, TRANSPORT_ERROR_MESSAGE)
        else:
            log.info(f"✅ Submission {request_id} returned {len(groceries)} items")
            finished = receive_groceries(self.state, request_id, groceries)

        if finished is not self.state:
            await self._show(finished)
        return self.state
