"""
The public registration flow.

    editing --submit--> confirming --confirm--> submitting --> succeeded
       ^                    |                        |
       +-------cancel-------+                        +------> failed

A succeeded or failed flow is editable again; the next submit starts over
from the (possibly cleared) draft. Only ``confirm`` talks to the API.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from idcards.drafts import DraftForm
from idcards.errors import ApiError, InvalidTransition, user_message
from idcards.services.api_client import UploadedFile

log = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Registration successful!"
FAILURE_MESSAGE = "Registration failed"


class Phase(str, Enum):
    EDITING = "editing"
    CONFIRMING = "confirming"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


EDITABLE = {Phase.EDITING, Phase.SUCCEEDED, Phase.FAILED}


class RegistrationFlow:
    def __init__(self, draft: DraftForm):
        self.draft = draft
        self.phase = Phase.EDITING
        self.message: Optional[str] = None
        self.error: Optional[str] = None

    def _require(self, *phases: Phase) -> None:
        if self.phase not in phases:
            raise InvalidTransition(f"not allowed while {self.phase.value}")

    @property
    def confirming(self) -> bool:
        return self.phase is Phase.CONFIRMING

    def update(
        self,
        fields: dict[str, str],
        image: Optional[UploadedFile] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """Apply field edits (and a newly picked photo) to the draft."""
        self._require(*EDITABLE)
        self.draft.update(fields)
        if image is not None:
            self.draft.set_image(image, content_type or image.content_type)

    def submit(self) -> list[str]:
        """Open the confirmation step, unless a required input is empty.

        Returns the names of the inputs that blocked it.
        """
        self._require(*EDITABLE)
        missing = self.draft.missing_fields()
        if missing:
            return missing
        self.message = None
        self.error = None
        self.phase = Phase.CONFIRMING
        return []

    def cancel(self) -> None:
        self._require(Phase.CONFIRMING)
        self.phase = Phase.EDITING

    async def confirm(self, api) -> bool:
        """Send the draft. On success the draft is cleared; on failure it is kept as is."""
        self._require(Phase.CONFIRMING)
        self.phase = Phase.SUBMITTING
        try:
            await api.create_student(self.draft.snapshot(), self.draft.image)
        except ApiError as e:
            self.phase = Phase.FAILED
            self.error = user_message(e, FAILURE_MESSAGE)
            log.info("Registration rejected: %s", self.error)
            return False
        self.draft.reset()
        self.phase = Phase.SUCCEEDED
        self.message = SUCCESS_MESSAGE
        return True
