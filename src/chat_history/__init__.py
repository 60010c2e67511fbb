"""Parse exported chat transcripts into a merged, classified history."""

from .aliases import AliasTable, load_alias_table
from .classifier import classify, classify_raw_message
from .errors import AliasConfigError, HistoryError, SourceUnreadableError
from .gaps import count_missing_days, find_missing_dates, spans_longer_than
from .identities import rank_by_message_count, rank_by_word_count, resolve_identities
from .merger import merge_message_lists
from .models import (
    DateSpan,
    Message,
    MessageKind,
    RankedIdentity,
    RawMessage,
    UserIdentity,
    WordFrequencyEntry,
)
from .pipeline import History, parse_history, parse_sources, parse_transcript
from .tokenizer import tokenize
from .words import (
    count_words,
    normalize_word,
    split_words,
    top_words,
    words_longer_than,
)
