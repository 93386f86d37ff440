"""Display helpers: value masking and shell variable rendering."""

from __future__ import annotations

# Order matters: the backslash must be escaped first.
_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("$", "\\$"),
    ("`", "\\`"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)
_UNESCAPES = {escaped[1]: raw for raw, escaped in _ESCAPES}

# Inside fish double quotes only \\, \" and \$ are escapes. Control characters
# leave the quotes and use fish's unquoted escapes, keeping one line per variable.
_FISH_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("$", "\\$"),
    ("\n", '"\\n"'),
    ("\r", '"\\r"'),
    ("\t", '"\\t"'),
)

SUPPORTED_SHELLS = ("bash", "zsh", "sh", "fish")


def mask_value(value: str) -> str:
    """Mask a secret for display, keeping the first and last 4 characters of long values."""
    if len(value) <= 8:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 8) + value[-4:]


def escape_shell_value(value: str) -> str:
    """Escape *value* for use inside double quotes."""
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def escape_fish_value(value: str) -> str:
    """Escape *value* for use inside fish double quotes."""
    for raw, escaped in _FISH_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def unescape_shell_value(value: str) -> str:
    """Exact inverse of :func:`escape_shell_value`."""
    out = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\" and i + 1 < len(value):
            out.append(_UNESCAPES.get(value[i + 1], value[i : i + 2]))
            i += 2
        else:
            out.append(char)
            i += 1
    return "".join(out)


def select_secrets(secrets: dict[str, str], pattern: str | None = None) -> list[tuple[str, str]]:
    """Entries whose key contains *pattern*, in blob order."""
    if not pattern:
        return list(secrets.items())
    return [(key, value) for key, value in secrets.items() if pattern in key]


def strip_prefix(key: str, prefix: str | None) -> str:
    if prefix and key.startswith(prefix):
        return key[len(prefix):]
    return key


def format_env_line(key: str, value: str, *, shell: str = "bash", export: bool = False) -> str:
    """Render one variable assignment for *shell*."""
    if shell == "fish":
        return f"set {'-gx' if export else '-g'} {key} \"{escape_fish_value(value)}\""
    quoted = f'"{escape_shell_value(value)}"'
    if export:
        return f"export {key}={quoted}"
    return f"{key}={quoted}"


def format_env_lines(
    secrets: dict[str, str],
    *,
    pattern: str | None = None,
    prefix: str | None = None,
    shell: str = "bash",
    export: bool = False,
) -> list[str]:
    return [
        format_env_line(strip_prefix(key, prefix), value, shell=shell, export=export)
        for key, value in select_secrets(secrets, pattern)
    ]
