"""Core service layer for Quote Widget.

Updates:
  v0.3.0 - 2026-09-17 - Export list model and widget actions for presentation layers.
  v0.2.0 - 2026-09-14 - Export widget resolver and timeline provider.
  v0.1.0 - 2026-09-04 - Surface QuoteStore, repositories, and the build_services factory.
"""

from models.quote_model import Quote

from .exceptions import (
    PreferenceStorageError,
    QuoteStorageError,
    QuoteValidationError,
    QuoteWidgetError,
)
from .factory import (
    QuoteWidgetServices,
    build_preference_channel,
    build_quote_store,
    build_services,
)
from .notifications import QuoteEvent, QuoteEventCenter, QuoteEventKind, Subscription
from .preferences import (
    DailyPick,
    PreferenceChannel,
    RedisPreferenceChannel,
    SQLitePreferenceChannel,
    WidgetPreferences,
)
from .quote_list import QuoteListModel, validate_quote_fields
from .quote_store import SAMPLE_QUOTES, QuoteStore
from .repository import (
    InMemoryQuoteRepository,
    QuoteBackend,
    QuoteRepository,
    RepositoryError,
    RepositoryNotFoundError,
)
from .widget import (
    QuoteEntry,
    Resolution,
    ResolutionTier,
    Timeline,
    WidgetActions,
    WidgetResolver,
    WidgetTimelineProvider,
    next_local_midnight,
)

__all__ = [
    "DailyPick",
    "InMemoryQuoteRepository",
    "PreferenceChannel",
    "PreferenceStorageError",
    "Quote",
    "QuoteBackend",
    "QuoteEntry",
    "QuoteEvent",
    "QuoteEventCenter",
    "QuoteEventKind",
    "QuoteListModel",
    "QuoteRepository",
    "QuoteStorageError",
    "QuoteStore",
    "QuoteValidationError",
    "QuoteWidgetError",
    "QuoteWidgetServices",
    "RedisPreferenceChannel",
    "RepositoryError",
    "RepositoryNotFoundError",
    "Resolution",
    "ResolutionTier",
    "SAMPLE_QUOTES",
    "SQLitePreferenceChannel",
    "Subscription",
    "Timeline",
    "WidgetActions",
    "WidgetPreferences",
    "WidgetResolver",
    "WidgetTimelineProvider",
    "build_preference_channel",
    "build_quote_store",
    "build_services",
    "next_local_midnight",
    "validate_quote_fields",
]
