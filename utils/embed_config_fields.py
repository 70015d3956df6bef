"""
Field validation for embed configurations.

Every write path (create, update, uploads) goes through ``validate_fields``.
It only ever returns writable keys with normalized values and never raises:
a value that can't be normalized is dropped so that a partial update only
loses the offending field instead of failing the whole request.
"""
import json
from typing import Any, Callable, Mapping, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from core.logging_config import get_logger

logger = get_logger(__name__)

Normalizer = Callable[[Any], Optional[Any]]

VALID_CHAT_MODES = ("chat", "query")
DEFAULT_CHAT_MODE = "query"

MAX_STRING_LENGTH = 255

# Upper bound of the INTEGER columns the numeric fields are stored in
MAX_INTEGER_VALUE = 2**31 - 1

WRITABLE_FIELDS = (
    "enabled",
    "allowlist_domains",
    "allow_model_override",
    "allow_temperature_override",
    "allow_prompt_override",
    "max_chats_per_day",
    "max_chats_per_session",
    "chat_mode",
    "workspace_id",
    "chatIcon",
    "buttonColor",
    "userBgColor",
    "assistantBgColor",
    "brandImageUrl",
    "assistantName",
    "assistantIcon",
    "position",
    "windowHeight",
    "windowWidth",
    "textSize",
    "supportEmail",
    "defaultMessages",
)

BOOLEAN_FIELDS = (
    "enabled",
    "allow_model_override",
    "allow_temperature_override",
    "allow_prompt_override",
)

NUMBER_FIELDS = (
    "max_chats_per_day",
    "max_chats_per_session",
    "workspace_id",
)

STRING_FIELDS = (
    "chatIcon",
    "buttonColor",
    "userBgColor",
    "assistantBgColor",
    "brandImageUrl",
    "assistantName",
    "assistantIcon",
    "position",
    "windowHeight",
    "windowWidth",
    "textSize",
    "supportEmail",
)

# Fields an update may explicitly reset to NULL by sending an empty value
CLEARABLE_FIELDS = ("allowlist_domains", "defaultMessages")

# Wire name -> EmbedConfig attribute
FIELD_ATTRIBUTES = {
    "chatIcon": "chat_icon",
    "buttonColor": "button_color",
    "userBgColor": "user_bg_color",
    "assistantBgColor": "assistant_bg_color",
    "brandImageUrl": "brand_image_url",
    "assistantName": "assistant_name",
    "assistantIcon": "assistant_icon",
    "windowHeight": "window_height",
    "windowWidth": "window_width",
    "textSize": "text_size",
    "supportEmail": "support_email",
    "defaultMessages": "default_messages",
}

_http_url = TypeAdapter(HttpUrl)


def normalize_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value[:MAX_STRING_LENGTH]


def normalize_boolean(value: Any) -> bool:
    # Only literal booleans survive; "true", 1, "on" all become False
    return value if value is True or value is False else False


def normalize_positive_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, (str, float)):
        try:
            as_float = float(value.strip() if isinstance(value, str) else value)
        except (ValueError, OverflowError):
            return None
        if not as_float.is_integer():
            return None
        number = int(as_float)
    else:
        return None

    if number <= 0 or number > MAX_INTEGER_VALUE:
        return None
    return number


def normalize_chat_mode(value: Any) -> str:
    if isinstance(value, str) and value in VALID_CHAT_MODES:
        return value
    return DEFAULT_CHAT_MODE


def normalize_allowlist_domains(value: Any) -> Optional[str]:
    """Coerce a comma separated list of domains into a JSON array of absolute URLs.

    Segments without an http(s) scheme get ``https://`` prepended, segments
    that still don't parse as a URL are dropped. Order is preserved.
    """
    if isinstance(value, str):
        value = value.strip()
    if not value:
        return None
    if isinstance(value, str):
        segments = value.split(",")
    elif isinstance(value, (list, tuple)):
        segments = value
    else:
        return None

    urls = []
    for segment in segments:
        if not isinstance(segment, str):
            continue
        url = segment.strip()
        if not url:
            continue
        if not url.lower().startswith(("http://", "https://")):
            url = f"https://{url}"
        try:
            _http_url.validate_python(url)
        except ValidationError:
            logger.debug(f"Dropping invalid allowlist domain: {segment!r}")
            continue
        urls.append(url)

    return json.dumps(urls)


def normalize_default_messages(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            messages = json.loads(value)
        except ValueError:
            logger.warning("Failed to parse defaultMessages, expected a JSON array of strings")
            return None
    elif isinstance(value, (list, tuple)):
        messages = list(value)
    else:
        return None

    if not isinstance(messages, list) or not all(isinstance(item, str) for item in messages):
        logger.warning("Invalid defaultMessages format, must be an array of strings")
        return None
    return json.dumps(messages)


def _build_normalizers() -> dict[str, Normalizer]:
    normalizers: dict[str, Normalizer] = {field: normalize_string for field in STRING_FIELDS}
    normalizers.update({field: normalize_boolean for field in BOOLEAN_FIELDS})
    normalizers.update({field: normalize_positive_int for field in NUMBER_FIELDS})
    normalizers["chat_mode"] = normalize_chat_mode
    normalizers["allowlist_domains"] = normalize_allowlist_domains
    normalizers["defaultMessages"] = normalize_default_messages
    return normalizers


NORMALIZERS: dict[str, Normalizer] = _build_normalizers()


def validate_fields(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Keep only writable fields, normalized; anything that fails normalization is omitted."""
    validated = {}
    if not data:
        return validated

    for field, raw_value in data.items():
        if field not in WRITABLE_FIELDS:
            continue
        normalizer = NORMALIZERS.get(field)
        if normalizer is None:
            continue
        value = normalizer(raw_value)
        if value is not None:
            validated[field] = value

    return validated


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def clearable_fields(data: Mapping[str, Any] | None) -> dict[str, None]:
    """Fields the caller explicitly emptied, mapped to None so an update can reset them."""
    if not data:
        return {}
    return {
        field: None
        for field in CLEARABLE_FIELDS
        if field in data and _is_blank(data[field])
    }


def to_attributes(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Translate wire field names to EmbedConfig attribute names."""
    return {FIELD_ATTRIBUTES.get(field, field): value for field, value in fields.items()}


def parse_allowed_hosts(embed) -> Optional[list[str]]:
    """Decode an embed's allowlist.

    Returns None when the allowlist is unset, meaning host checking is
    skipped. A stored value that can't be decoded returns an empty list so a
    bad parse never opens the embed to every origin.
    """
    if not embed.allowlist_domains:
        return None

    try:
        hosts = json.loads(embed.allowlist_domains)
    except (TypeError, ValueError):
        logger.error_ctx("Failed to parse allowlist_domains", embed_id=embed.id)
        return []

    if not isinstance(hosts, list):
        logger.error_ctx("allowlist_domains is not a list", embed_id=embed.id)
        return []
    return hosts
