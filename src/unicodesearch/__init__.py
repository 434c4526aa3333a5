from .client import fetch_dataset, load_dataset_file
from .gemoji import merge_keywords
from .grid import EMOJI_COLUMNS, EmojiGrid, RenderTarget, apply_view
from .models import GemojiEntry, NormalizedRecord, RawRecord, SortState
from .normalizer import normalize_all
from .parser import EmojiTestParser, parse_emoji_test
from .predicates import match_any, match_exact, match_present, match_tags, match_text
from .query_state import MemoryQueryString, PersistentQueryString, QueryStateSync
from .tag_toggle import toggle_tag
