"""Input validation stage.

Runs before any service call touches the database. Each validator checks
the shape of a request payload against a table of (predicate, message)
rules, collects every failure as {"field", "message"}, and raises a single
ValidationFailure. On success it returns the cleaned values.

All free text is stripped of HTML with bleach before it is stored.
"""

import bleach

from cardwall.errors import ValidationFailure


def sanitize(text):
    """Strip all HTML tags from user input."""
    if text is None:
        return text
    return bleach.clean(text, tags=[], strip=True).strip()


def _is_text(value):
    return isinstance(value, str)


def _is_id(value):
    return isinstance(value, str) and 0 < len(value) <= 36


def check(props, rules):
    """Run ``rules`` ({field: [(predicate, message), ...]}) against ``props``.

    Rules for a field stop at the first failure, so later predicates may
    assume earlier ones held.
    """
    errors = []
    for field, field_rules in rules.items():
        value = props.get(field)
        for predicate, message in field_rules:
            if not predicate(value):
                errors.append({"field": field, "message": message})
                break
    return errors


def ensure_valid(props, rules):
    errors = check(props, rules)
    if errors:
        raise ValidationFailure(errors)


def text_rules(max_length, label="Text"):
    return [
        (lambda v: v is not None, f"{label} is required"),
        (_is_text, f"{label} must be a string"),
        (lambda v: bool(sanitize(v)), f"{label} must not be empty"),
        (lambda v: len(v) <= max_length, f"Must be at most {max_length} characters long"),
    ]


def validate_card(props, max_length, partial=False):
    """Validate card create/update input and return the recognized fields.

    With ``partial=True`` (updates) only the fields present are checked
    and returned; unknown keys are dropped either way.
    """
    if not isinstance(props, dict):
        raise ValidationFailure([{"field": None, "message": "Expected a JSON object"}])

    rules = {"text": text_rules(max_length)}
    if partial:
        rules = {k: v for k, v in rules.items() if k in props}
    ensure_valid(props, rules)
    return {field: sanitize(props[field]) for field in rules}


def validate_color(payload, palette):
    """Return the palette color id from ``{"color_id": n}``."""
    valid_ids = {color_id for color_id, _ in palette}
    payload = payload if isinstance(payload, dict) else {}
    ensure_valid(payload, {
        "color_id": [
            (lambda v: v is not None, "Color id is required"),
            (lambda v: isinstance(v, int) and not isinstance(v, bool), "Color id must be an integer"),
            (lambda v: v in valid_ids, "Unknown color"),
        ],
    })
    return payload["color_id"]


def _list_rules(label):
    return [
        (lambda v: isinstance(v, dict), f"{label} is required"),
        (lambda v: _is_id(v.get("id")), f"{label} id is required"),
        (lambda v: isinstance(v.get("cards"), list), f"{label} cards must be a list"),
        (lambda v: all(_is_id(c) for c in v["cards"]), f"{label} cards must be card ids"),
        (lambda v: len(set(v["cards"])) == len(v["cards"]), f"{label} cards contain duplicates"),
    ]


def validate_move(payload):
    """Validate ``{"source_list": {...}, "target_list": {...}}``.

    Returns the (source, target) pair as {"id", "cards"} dicts. When the
    two ids differ a card may appear in only one of them.
    """
    payload = payload if isinstance(payload, dict) else {}
    ensure_valid(payload, {
        "source_list": _list_rules("Source list"),
        "target_list": _list_rules("Target list"),
    })
    source = {"id": payload["source_list"]["id"], "cards": list(payload["source_list"]["cards"])}
    target = {"id": payload["target_list"]["id"], "cards": list(payload["target_list"]["cards"])}

    if source["id"] != target["id"]:
        shared = set(source["cards"]) & set(target["cards"])
        if shared:
            raise ValidationFailure([{
                "field": "target_list",
                "message": f"Cards cannot be in both lists: {', '.join(sorted(shared))}",
            }])
    return source, target


def validate_comment(payload, max_length):
    payload = payload if isinstance(payload, dict) else {}
    ensure_valid(payload, {"text": text_rules(max_length, label="Comment")})
    return sanitize(payload["text"])
