_TERMINATORS = (".", "!", "?")


def word_count(text: str) -> int:
    return len((text or "").split())


def finalize_summary(text: str) -> str:
    """Trim, capitalize the first character and make sure it ends like a sentence."""
    s = (text or "").strip()
    if not s:
        return s
    s = s[0].upper() + s[1:]
    if not s.endswith(_TERMINATORS):
        s += "."
    return s
