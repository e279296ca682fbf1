from __future__ import annotations

from typing import Any, Iterable

from ldap3.utils.dn import escape_rdn


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def eq_filter(attribute: str, value: str) -> str:
    return f"({attribute}={escape_ldap_filter_value(value)})"


def candidate_dn(attribute: str, value: str, base: str) -> str:
    """DN a user would have if stored directly under ``base``."""
    return f"{attribute}={escape_rdn(value)},{base}"


def split_domain_bases(text: str | None) -> list[str]:
    if not text:
        return []
    return [x.strip() for x in text.split(",") if x.strip()]


def join_domain_bases(bases: Iterable[str]) -> str:
    items = list(bases)
    for base in items:
        if "," in base:
            raise ValueError(f"Domain base must not contain a comma: {base!r}")
    return ",".join(items)


def normalize_entry(dn: str, attributes: Any) -> dict[str, list[Any]]:
    """Flatten an ldap3 response item into ``{attr: [values]}`` with lower-cased keys."""
    entry: dict[str, list[Any]] = {"dn": [dn]} if dn else {}
    for name, value in dict(attributes or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            values = list(value)
        else:
            values = [value]
        if values:
            entry[name.lower()] = values
    return entry
