"""Profanity blocklist used by the Sqids engine.

Words are matched case-insensitively against generated ids. Short words
(three characters or fewer) only block an exact match; longer words are
also checked in their leetspeak form (i/l -> 1, o -> 0).
"""

import re
from collections.abc import Iterable

DEFAULT_BLOCKLIST: tuple[str, ...] = (
    "aand", "ahole", "allupato", "anal", "anale", "anus", "arrapato", "arsch",
    "arse", "ass", "balatkar", "bastardo", "battona", "bitch", "bite", "bitte",
    "boceta", "boiata", "boob", "boobe", "bosta", "branlage", "branler",
    "branlette", "branleur", "branleuse", "cabrao", "cabron", "caca", "cacca",
    "cacete", "cagante", "cagar", "cagare", "cagna", "caraculo", "caralho",
    "cazzata", "cazzimma", "cazzo", "chatte", "chiasse", "chiavata", "chier",
    "chingadazos", "chingaderita", "chingar", "chingo", "chingues", "chink",
    "chod", "chootia", "chootiya", "clit", "clito", "cock", "coglione", "cona",
    "connard", "connasse", "conne", "couilles", "cracker", "crap", "culattone",
    "culero", "culo", "cum", "cunt", "damn", "deich", "depp", "dick", "dildo",
    "dyke", "encule", "enema", "enfoire", "estupido", "etron", "fag", "fica",
    "ficker", "figa", "foda", "foder", "fottere", "fottersi", "fotze",
    "foutre", "frocio", "froscio", "fuck", "gandu", "goo", "gouine",
    "grognasse", "harami", "haramzade", "hundin", "idiot", "imbecile", "jerk",
    "jizz", "kamine", "kike", "leccaculo", "mamahuevo", "mamon", "masturbate",
    "masturbation", "merda", "merde", "merdoso", "mierda", "mignotta",
    "minchia", "mist", "muschi", "neger", "negre", "negro", "nerchia",
    "nigger", "orgasm", "palle", "paneleiro", "patakha", "pecorina", "pendejo",
    "penis", "pipi", "pirla", "piscio", "pisser", "polla", "pompino", "poop",
    "porca", "porn", "porra", "pouffiasse", "prick", "pussy", "puta", "putain",
    "pute", "putiza", "puttana", "queca", "randi", "rape", "recchione",
    "retard", "rompiballe", "ruffiano", "sacanagem", "salaud", "salope",
    "saugnapf", "sbattere", "sbattersi", "sborra", "sborrone", "scheise",
    "scheisse", "schlampe", "schwachsinnig", "schwanz", "scopare", "scopata",
    "sexy", "shit", "slut", "spompinare", "stronza", "stronzo", "stupid",
    "succhiami", "sucker", "tapette", "testicle", "tette", "topa", "tringler",
    "troia", "trombare", "turd", "twat", "vaffanculo", "vagina", "verdammt",
    "verga", "wank", "wichsen", "xana", "xochota", "zizi", "zoccola",
)

LEET = {
    "i": "[i1]",
    "o": "[o0]",
    "l": "[l1]",
}

_DIGIT = re.compile(r"\d")


def _to_leet(word: str) -> str:
    return "".join(LEET.get(char, char) for char in word)


def compile_blocklist(words: Iterable[str]) -> re.Pattern[str] | None:
    """Compile blocklist words into a single case-insensitive pattern.

    Matching rules:
        - words of length <= 3 block only an identical id
        - longer words without digits block ids containing them anywhere
        - longer words with digits block ids starting or ending with them
        - leetspeak variants block ids starting or ending with them

    Args:
        words: Blocklist words

    Returns:
        Compiled pattern, or None for an empty blocklist
    """
    exact: list[str] = []
    edges: list[str] = []
    anywhere: list[str] = []

    for raw in words:
        word = str(raw)
        if len(word) <= 3:
            exact.append(re.escape(word))
            continue

        word = re.escape(word)
        leet = _to_leet(word)

        if not _DIGIT.search(word):
            anywhere.append(word)
        elif leet == word:
            edges.append(word)

        if leet != word:
            edges.append(leet)

    parts = []
    if exact:
        parts.append(f"^({'|'.join(exact)})$")
    if edges:
        parts.append(f"^({'|'.join(edges)})")
        parts.append(f"({'|'.join(edges)})$")
    if anywhere:
        parts.append(f"({'|'.join(anywhere)})")

    if not parts:
        return None
    return re.compile(f"({'|'.join(parts)})", re.IGNORECASE)
