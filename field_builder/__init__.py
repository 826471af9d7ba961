"""Library helpers for the field builder application."""

from .choices import ChoiceSet, SelectionTracker  # noqa: F401
from .errors import ChoiceEntryError, ChoiceError, DefinitionError  # noqa: F401
from .field_definition import (  # noqa: F401
    CommittedDefinition,
    FieldDefinition,
    validate_definition,
)
from .ordering import OrderPolicy, apply_order, visible_choices  # noqa: F401
from .session import EditorSession, EditorState  # noqa: F401
