# src/accessibility_checker/utils/languages.py
import re
from typing import Optional

# ISO 639-1 two-letter language codes
ISO_639_1_CODES = frozenset("""
aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co cr cs cu cv cy
da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy ga gd gl gn gu gv ha he hi ho hr ht hu
hy hz ia id ie ig ii ik io is it iu ja jv ka kg ki kj kk kl km kn ko kr ks ku kv kw ky la lb
lg li ln lo lt lu lv mg mh mi mk ml mn mr ms mt my na nb nd ne ng nl nn no nr nv ny oc oj om
or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg si sk sl sm sn so sq sr ss st su sv sw
ta te tg th ti tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo wa wo xh yi yo za zh zu
""".split())

_SUBTAG = re.compile(r"^[A-Za-z0-9]{1,8}$")


def primary_subtag(lang: str) -> Optional[str]:
    """Returns the lower-cased primary language subtag of a BCP 47 tag, or None if malformed."""
    parts = lang.strip().split("-")
    if not parts or not all(_SUBTAG.match(p) for p in parts):
        return None
    return parts[0].lower()


def is_valid_language_code(lang: str) -> bool:
    primary = primary_subtag(lang)
    return primary is not None and primary in ISO_639_1_CODES
