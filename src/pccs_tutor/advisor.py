"""Language-model color advice over an OpenAI-compatible chat completions API."""
import base64
import json
import logging
import mimetypes
import re
from pathlib import Path
from typing import Any

import httpx

from pccs_tutor.errors import ConfigurationError, MalformedResponseError, TransportError
from pccs_tutor.models import (
    ColorEntry, MoodMatch, PaletteColor, SeasonalAnalysis, Settings,
)
from pccs_tutor.palette import TONES, get_tone

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
MAX_IMAGE_BYTES = 4 * 1024 * 1024

SEASONS = (
    "Cool Winter", "Deep Winter", "Clear Winter",
    "Cool Summer", "Soft Summer", "Light Summer",
    "Warm Autumn", "Soft Autumn", "Deep Autumn",
    "Warm Spring", "Light Spring", "Clear Spring",
)
CONFIDENCE_LEVELS = ("High", "Medium", "Low")
_SEASONS_BY_KEY = {season.lower(): season for season in SEASONS}
_CONFIDENCE_BY_KEY = {level.lower(): level for level in CONFIDENCE_LEVELS}
PALETTE_SIZE = 6
WORST_COLORS_SIZE = 3

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

DESIGN_TIP_SYSTEM = "You are a helpful design assistant."
MOOD_SYSTEM = "You are a color matching expert who speaks JSON."

SEASON_SYSTEM = f"""You are a professional color analyst and personal stylist.
Analyze the person in the image and assign one of the twelve seasons:
{", ".join(SEASONS)}.
Base the call on iris pattern and rim, eyebrow contrast, lip pigment and face shape.
Return ONLY a JSON object, without markdown fences, shaped like:
{{
  "season": "<one of the twelve seasons>",
  "confidence": "High|Medium|Low",
  "reasoning": "<observed features and how they led to the season>",
  "characteristics": {{"undertone": "Cool|Warm|Neutral", "contrast": "High|Medium|Low", "primary_feature": "<e.g. Deep, Soft, Clear>"}},
  "palette": [{PALETTE_SIZE} x {{"name": "...", "hex": "#RRGGBB", "reason": "..."}}],
  "worst_colors": [{WORST_COLORS_SIZE} x {{"name": "...", "hex": "#RRGGBB"}}],
  "fashion_advice": "<clothing, metals and makeup advice>"
}}"""


def chat_completions_url(base_url: str) -> str:
    base = base_url.rstrip("/")
    if "chat/completions" in base:
        return base
    return f"{base}/chat/completions"


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or "")
    return ""


def call_chat(
    settings: Settings,
    user_content: str | list[dict],
    system_instruction: str = "",
    temperature: float = 0.7,
    max_tokens: int | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Send one chat completion request and return the reply text.

    Raises ConfigurationError before any I/O when no credential is set,
    TransportError for network failures and non-2xx replies, and
    MalformedResponseError when the reply carries no message content.
    """
    if not settings.api_key:
        raise ConfigurationError(
            "No API key configured. Set PCCS_API_KEY or enter one under 'settings'."
        )
    url = chat_completions_url(settings.base_url)
    payload: dict[str, Any] = {
        "model": settings.model,
        "messages": [
            {"role": "system", "content": system_instruction},
            {"role": "user", "content": user_content},
        ],
        "temperature": temperature,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {settings.api_key}"}

    logger.debug("POST %s (model=%s)", url, settings.model)
    owns_client = client is None
    client = client or httpx.Client(timeout=httpx.Timeout(DEFAULT_TIMEOUT))
    try:
        response = client.post(url, headers=headers, json=payload)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Advisory request to %s failed: %s", url, e)
        raise TransportError(f"Request failed: {e}") from e
    finally:
        if owns_client:
            client.close()

    if not response.is_success:
        detail = _error_detail(response)
        logger.warning("Advisory request returned HTTP %s", response.status_code)
        raise TransportError(
            f"API Error: {response.status_code} {detail}".strip(), status_code=response.status_code
        )
    try:
        data = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError("Could not interpret the response") from e
    if not isinstance(content, str) or not content.strip():
        raise MalformedResponseError("Received an empty response")
    return content


def parse_json_reply(text: str) -> dict:
    """Parse a JSON object from a reply, tolerating markdown code fences."""
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError("Could not interpret the response") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("Could not interpret the response")
    return data


def get_design_tip(settings: Settings, card: ColorEntry, client: httpx.Client | None = None) -> str:
    prompt = (
        f'Give concise design advice (at most 2 sentences) for the {card.hue_name} variant '
        f'of the PCCS tone "{card.tone_name}". Mention one ideal use case, such as '
        f'"a tech company logo" or "a nursery wall". Avoid jargon and focus on the emotional effect.'
    )
    return call_chat(settings, prompt, DESIGN_TIP_SYSTEM, temperature=0.7, client=client).strip()


def match_mood(settings: Settings, description: str, client: httpx.Client | None = None) -> MoodMatch:
    """Map a free-text mood or scene to exactly one of the twelve tones."""
    if not description.strip():
        raise ValueError("Describe a mood or scene to match")
    choices = ", ".join(f"'{tone.id}' ({tone.name})" for tone in TONES)
    prompt = (
        "You are a color expert using the PCCS (Practical Color Coordinate System). "
        f'The user wants a color tone for: "{description}".\n'
        f"Map this request to exactly ONE of these 12 IDs: {choices}.\n"
        'Return ONLY valid JSON in this format: {"id": "code", "reasoning": '
        '"short explanation of why this tone fits the user\'s text"}'
    )
    data = parse_json_reply(call_chat(settings, prompt, MOOD_SYSTEM, temperature=0.7, client=client))
    reasoning = data.get("reasoning")
    try:
        tone = get_tone(data.get("id"))
    except (KeyError, TypeError) as e:
        raise MalformedResponseError("Could not find a matching tone for that description") from e
    if not isinstance(reasoning, str):
        raise MalformedResponseError("Could not interpret the response")
    return MoodMatch(tone=tone, reasoning=reasoning)


def _require_str(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise MalformedResponseError(f"Missing field: {field}")
    return value


def _palette_colors(data: dict, field: str, size: int, with_reason: bool) -> tuple[PaletteColor, ...]:
    entries = data.get(field)
    if not isinstance(entries, list) or len(entries) != size:
        raise MalformedResponseError(f"Expected {size} entries in {field}")
    colors = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise MalformedResponseError(f"Malformed entry in {field}")
        hex_value = _require_str(entry, "hex")
        if not _HEX_RE.match(hex_value):
            raise MalformedResponseError(f"Invalid hex color in {field}: {hex_value}")
        colors.append(PaletteColor(
            name=_require_str(entry, "name"),
            hex=hex_value,
            reason=_require_str(entry, "reason") if with_reason else "",
        ))
    return tuple(colors)


def parse_seasonal_analysis(data: dict) -> SeasonalAnalysis:
    season = _require_str(data, "season").strip()
    season = _SEASONS_BY_KEY.get(season.lower())
    if season is None:
        raise MalformedResponseError(f"Unknown season: {data['season']}")
    # Hedged levels such as "Medium/High" are shown as given.
    confidence = _require_str(data, "confidence").strip()
    confidence = _CONFIDENCE_BY_KEY.get(confidence.lower(), confidence)
    traits = data.get("characteristics")
    if not isinstance(traits, dict):
        raise MalformedResponseError("Missing field: characteristics")
    return SeasonalAnalysis(
        season=season,
        confidence=confidence,
        reasoning=_require_str(data, "reasoning"),
        undertone=_require_str(traits, "undertone"),
        contrast=_require_str(traits, "contrast"),
        primary_feature=_require_str(traits, "primary_feature"),
        palette=_palette_colors(data, "palette", PALETTE_SIZE, with_reason=True),
        worst_colors=_palette_colors(data, "worst_colors", WORST_COLORS_SIZE, with_reason=False),
        fashion_advice=_require_str(data, "fashion_advice"),
    )


def analyze_season(settings: Settings, image_url: str, client: httpx.Client | None = None) -> SeasonalAnalysis:
    """Seasonal color analysis of a portrait given as a data: or http(s) URL."""
    if not settings.api_key:
        raise ConfigurationError(
            "No API key configured. Set PCCS_API_KEY or enter one under 'settings'."
        )
    if not image_url:
        raise ValueError("An image is required for seasonal analysis")
    user_content = [
        {"type": "text", "text": "Analyze this person's seasonal color palette based on the system prompt."},
        {"type": "image_url", "image_url": {"url": image_url}},
    ]
    reply = call_chat(
        settings, user_content, SEASON_SYSTEM, temperature=0.4, max_tokens=1000, client=client,
    )
    return parse_seasonal_analysis(parse_json_reply(reply))


def encode_image(path: str) -> str:
    """Read an image file into a base64 data URL."""
    file_path = Path(path)
    raw = file_path.read_bytes()
    if len(raw) > MAX_IMAGE_BYTES:
        raise ValueError("Image is too large. Use a file under 4MB.")
    mime = mimetypes.guess_type(file_path.name)[0] or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"
