"""
Recipient info form state

Holds the three recipient fields, re-validates on every change and exposes
per-field messages. Submitting hands a validated RecipientInfo to the
caller's callback.
"""
import logging
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from ..schemas.recipient import RecipientInfo

logger = logging.getLogger(__name__)

FIELDS = ("recipient_name", "recipient_phone", "recipient_national_id")
# error locations may carry the camelCase alias
_BY_ALIAS = {RecipientInfo.model_fields[field].alias: field for field in FIELDS}


class RecipientInfoForm:
    def __init__(
        self,
        on_submit: Callable[[RecipientInfo], None],
        on_back: Optional[Callable[[], None]] = None,
        initial: Optional[Dict[str, str]] = None,
    ):
        self.on_submit = on_submit
        self.on_back = on_back
        self.values: Dict[str, str] = {field: "" for field in FIELDS}
        if initial:
            for field, value in initial.items():
                self._check_field(field)
                self.values[field] = value
        self.touched = set()
        self.is_submitting = False
        self._errors: Dict[str, str] = {}
        self._validate()

    def _check_field(self, field: str):
        if field not in FIELDS:
            raise KeyError(f"Unknown recipient field: {field}")

    def _validate(self):
        try:
            RecipientInfo(**self.values)
        except ValidationError as e:
            self._errors = {}
            for err in e.errors():
                field = _BY_ALIAS.get(err["loc"][0], err["loc"][0])
                # first failing rule per field wins
                self._errors.setdefault(field, err["msg"])
        else:
            self._errors = {}

    def set(self, field: str, value: str):
        """Update a field and re-validate the form."""
        self._check_field(field)
        self.values[field] = value
        self.touched.add(field)
        self._validate()

    @property
    def errors(self) -> Dict[str, str]:
        """Messages for fields the user has edited."""
        return {field: msg for field, msg in self._errors.items() if field in self.touched}

    def error_for(self, field: str) -> Optional[str]:
        self._check_field(field)
        return self.errors.get(field)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def can_submit(self) -> bool:
        return self.is_valid and not self.is_submitting

    @property
    def can_go_back(self) -> bool:
        return self.on_back is not None and not self.is_submitting

    def submit(self) -> bool:
        """
        Submit the form.

        Returns False (and marks every field touched so all messages show)
        when the form is invalid or already submitting.
        """
        if not self.can_submit:
            self.touched.update(FIELDS)
            return False

        self.is_submitting = True
        try:
            self.on_submit(RecipientInfo(**self.values))
        finally:
            self.is_submitting = False
        return True

    def back(self) -> bool:
        """Go back; allowed whatever the validation state."""
        if not self.can_go_back:
            return False
        self.on_back()
        return True
