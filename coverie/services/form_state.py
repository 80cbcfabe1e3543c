import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from coverie.schemas.cover_schemas import (
    CoverPageData,
    FIELD_NAME_LOOKUP,
    FORM_FIELD_NAMES,
    FormValidation,
    default_form_values,
    validate_cover_page,
)

logger = logging.getLogger(__name__)

Listener = Callable[["CoverFormState"], None]


class FormInvalidError(ValueError):
    """Raised when an action needs a valid record and the form has field errors."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors)) or "unknown"
        super().__init__(f"Cover page form has invalid fields: {fields}")


class CoverFormState:
    """
    Holds the cover page values for one editing session.

    - values are mutated in place (no history, no undo)
    - every change re-validates synchronously and notifies subscribers
    - subscribers read the current state directly from the object
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None, today: Optional[date] = None):
        self._today = today
        self._values: Dict[str, Any] = default_form_values(today)
        self._listeners: List[Listener] = []
        self._validation: FormValidation = FormValidation(valid=False)
        if initial:
            for name, value in initial.items():
                self._values[self._form_name(name)] = value
        self._revalidate()

    @staticmethod
    def _form_name(name: str) -> str:
        python_name = FIELD_NAME_LOOKUP.get(name)
        if python_name is None:
            raise KeyError(f"Unknown cover page field: {name}")
        return FORM_FIELD_NAMES[python_name]

    # -----------------------------
    # Read side
    # -----------------------------
    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._validation.errors)

    @property
    def is_valid(self) -> bool:
        return self._validation.valid

    def get(self, name: str) -> Any:
        return self._values[self._form_name(name)]

    def validated(self) -> CoverPageData:
        if not self._validation.valid or self._validation.data is None:
            raise FormInvalidError(self._validation.errors)
        return self._validation.data

    # -----------------------------
    # Write side
    # -----------------------------
    def set_field(self, name: str, value: Any) -> None:
        self._values[self._form_name(name)] = value
        self._changed()

    def update(self, **values: Any) -> None:
        # resolve every name first so a bad key leaves the record untouched
        resolved = {self._form_name(name): value for name, value in values.items()}
        self._values.update(resolved)
        self._changed()

    def reset(self) -> None:
        self._values = default_form_values(self._today)
        self._changed()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _revalidate(self) -> None:
        self._validation = validate_cover_page(self._values, today=self._today)
        logger.debug("cover form revalidated, %d field error(s)", len(self._validation.errors))

    def _changed(self) -> None:
        self._revalidate()
        for listener in list(self._listeners):
            listener(self)
