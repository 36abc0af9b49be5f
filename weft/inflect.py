"""English word inflection used to name generated tables and types."""

from __future__ import annotations

import re

_Rule = tuple[re.Pattern, str]


def _compile(rules: list[tuple[str, str]]) -> list[_Rule]:
    # Later rules take precedence, so the list is reversed once here.
    return [(re.compile(pattern, re.IGNORECASE), repl) for pattern, repl in reversed(rules)]


_UNCOUNTABLE_PATTERNS = [
    r"pok[eé]mon$",
    r"[^aeiou]ese$",
    r"deer$",
    r"fish$",
    r"measles$",
    r"o[iu]s$",
    r"pox$",
    r"sheep$",
]

_UNCOUNTABLE_WORDS = frozenset(
    """
    adulthood advice agenda aid aircraft alcohol ammo analytics anime athletics
    audio bison blood bream buffalo butter carp cash chassis chess clothing cod
    commerce cooperation corps debris diabetes digestion elk energy equipment
    excretion expertise firmware flounder fun gallows garbage graffiti hardware
    headquarters health herpes highjinks homework housework information jeans
    justice kudos labour literature machinery mackerel mail media mews moose
    music mud manga news only personnel pike plankton pliers police pollution
    premises rain research rice salmon scissors series sewage shambles shrimp
    software staff swine tennis traffic transportation trout tuna wealth welfare
    whiting wildebeest wildlife you
    """.split()
)

_PLURAL_RULES = _compile(
    [
        (r"s?$", "s"),
        (r"[^\x00-\x7F]$", "$0"),
        (r"([^aeiou]ese)$", "$1"),
        (r"(ax|test)is$", "$1es"),
        (r"(alias|[^aou]us|t[lm]as|gas|ris)$", "$1es"),
        (r"(e[mn]u)s?$", "$1s"),
        (r"([^l]ias|[aeiou]las|[ejzr]as|[iu]am)$", "$1"),
        (
            r"(alumn|syllab|vir|radi|nucle|fung|cact|stimul|termin|bacill|foc|uter|loc|strat)(?:us|i)$",
            "$1i",
        ),
        (r"(alumn|alg|vertebr)(?:a|ae)$", "$1ae"),
        (r"(seraph|cherub)(?:im)?$", "$1im"),
        (r"(her|at|gr)o$", "$1oes"),
        (
            r"(agend|addend|millenni|dat|extrem|bacteri|desiderat|strat|candelabr|errat|ov|symposi"
            r"|curricul|automat|quor)(?:a|um)$",
            "$1a",
        ),
        (
            r"(apheli|hyperbat|periheli|asyndet|noumen|phenomen|criteri|organ|prolegomen|hedr|automat)"
            r"(?:a|on)$",
            "$1a",
        ),
        (r"sis$", "ses"),
        (r"(?:(kni|wi|li)fe|(ar|l|ea|eo|oa|hoo)f)$", "$1$2ves"),
        (r"([^aeiouy]|qu)y$", "$1ies"),
        (r"([^ch][ieo][ln])ey$", "$1ies"),
        (r"(x|ch|ss|sh|zz)$", "$1es"),
        (r"(matr|cod|mur|sil|vert|ind|append)(?:ix|ex)$", "$1ices"),
        (r"\b((?:tit)?m|l)(?:ice|ouse)$", "$1ice"),
        (r"(pe)(?:rson|ople)$", "$1ople"),
        (r"(child)(?:ren)?$", "$1ren"),
        (r"eaux$", "$0"),
        (r"m[ae]n$", "men"),
        (r"^thou$", "you"),
        *((pattern, "$0") for pattern in _UNCOUNTABLE_PATTERNS),
    ]
)

_SINGULAR_RULES = _compile(
    [
        (r"s$", ""),
        (r"(ss)$", "$1"),
        (r"(wi|kni|(?:after|half|high|low|mid|non|night|[^\w]|^)li)ves$", "$1fe"),
        (r"(ar|(?:wo|[ae])l|[eo][ao])ves$", "$1f"),
        (r"ies$", "y"),
        (r"(dg|ss|ois|lk|ok|wn|mb|th|ch|ec|oal|is|ck|ix|sser|ts|wb)ies$", "$1ie"),
        (
            r"\b(l|(?:neck|cross|hog|aun)?t|coll|faer|food|gen|goon|group|hipp|junk|vegg|(?:pork)?p"
            r"|charl|calor|cut)ies$",
            "$1ie",
        ),
        (r"\b(mon|smil)ies$", "$1ey"),
        (r"\b((?:tit)?m|l)ice$", "$1ouse"),
        (r"(seraph|cherub)im$", "$1"),
        (
            r"(x|ch|ss|sh|zz|tto|go|cho|alias|[^aou]us|t[lm]as|gas|(?:her|at|gr)o|[aeiou]ris)(?:es)?$",
            "$1",
        ),
        (r"(analy|diagno|parenthe|progno|synop|the|empha|cri|ne)(?:sis|ses)$", "$1sis"),
        (r"(movie|twelve|abuse|e[mn]u)s$", "$1"),
        (r"(test)(?:is|es)$", "$1is"),
        (
            r"(alumn|syllab|vir|radi|nucle|fung|cact|stimul|termin|bacill|foc|uter|loc|strat)(?:us|i)$",
            "$1us",
        ),
        (
            r"(agend|addend|millenni|dat|extrem|bacteri|desiderat|strat|candelabr|errat|ov|symposi"
            r"|curricul|quor)a$",
            "$1um",
        ),
        (
            r"(apheli|hyperbat|periheli|asyndet|noumen|phenomen|criteri|organ|prolegomen|hedr|automat)a$",
            "$1on",
        ),
        (r"(alumn|alg|vertebr)ae$", "$1a"),
        (r"(cod|mur|sil|vert|ind)ices$", "$1ex"),
        (r"(matr|append)ices$", "$1ix"),
        (r"(pe)(rson|ople)$", "$1rson"),
        (r"(child)ren$", "$1"),
        (r"(eau)x?$", "$1"),
        (r"men$", "man"),
        *((pattern, "$0") for pattern in _UNCOUNTABLE_PATTERNS),
    ]
)

_IRREGULAR = [
    ("i", "we"),
    ("me", "us"),
    ("he", "they"),
    ("she", "they"),
    ("them", "them"),
    ("myself", "ourselves"),
    ("yourself", "yourselves"),
    ("itself", "themselves"),
    ("herself", "themselves"),
    ("himself", "themselves"),
    ("themself", "themselves"),
    ("is", "are"),
    ("was", "were"),
    ("has", "have"),
    ("this", "these"),
    ("that", "those"),
    ("echo", "echoes"),
    ("dingo", "dingoes"),
    ("volcano", "volcanoes"),
    ("tornado", "tornadoes"),
    ("torpedo", "torpedoes"),
    ("genus", "genera"),
    ("viscus", "viscera"),
    ("stigma", "stigmata"),
    ("stoma", "stomata"),
    ("dogma", "dogmata"),
    ("lemma", "lemmata"),
    ("schema", "schemata"),
    ("anathema", "anathemata"),
    ("ox", "oxen"),
    ("axe", "axes"),
    ("die", "dice"),
    ("yes", "yeses"),
    ("foot", "feet"),
    ("eave", "eaves"),
    ("goose", "geese"),
    ("tooth", "teeth"),
    ("quiz", "quizzes"),
    ("human", "humans"),
    ("proof", "proofs"),
    ("carve", "carves"),
    ("valve", "valves"),
    ("looey", "looies"),
    ("thief", "thieves"),
    ("groove", "grooves"),
    ("pickaxe", "pickaxes"),
    ("passerby", "passersby"),
]

_SINGLE_TO_PLURAL = dict(_IRREGULAR)
_PLURAL_TO_SINGLE = {plural: single for single, plural in _IRREGULAR}

_GROUP_REF = re.compile(r"\$(\d{1,2})")


def _restore_case(original: str, token: str) -> str:
    """Give ``token`` the letter case used by ``original``."""
    if original == token:
        return token
    if original == original.lower():
        return token.lower()
    if original == original.upper():
        return token.upper()
    if original[:1] == original[:1].upper():
        return token[:1].upper() + token[1:].lower()
    return token.lower()


def _apply(word: str, pattern: re.Pattern, repl: str) -> str | None:
    match = pattern.search(word)
    if match is None:
        return None
    groups = [match.group(0), *match.groups()]

    def group(ref: re.Match) -> str:
        index = int(ref.group(1))
        return (groups[index] or "") if index < len(groups) else ""

    result = _GROUP_REF.sub(group, repl)
    matched = match.group(0)
    if matched:
        result = _restore_case(matched, result)
    else:
        result = _restore_case(word[match.start() - 1 : match.start()], result)
    return word[: match.start()] + result + word[match.end() :]


def _sanitize(token: str, word: str, rules: list[_Rule]) -> str:
    if not token or token in _UNCOUNTABLE_WORDS:
        return word
    for pattern, repl in rules:
        replaced = _apply(word, pattern, repl)
        if replaced is not None:
            return replaced
    return word


def _inflect(word: str, keep: dict[str, str], replace: dict[str, str], rules: list[_Rule]) -> str:
    token = word.lower()
    if token in keep:
        return _restore_case(word, token)
    if token in replace:
        return _restore_case(word, replace[token])
    return _sanitize(token, word, rules)


def pluralize(word: str) -> str:
    """Return the plural form of ``word``."""
    return _inflect(word, _PLURAL_TO_SINGLE, _SINGLE_TO_PLURAL, _PLURAL_RULES)


def singularize(word: str) -> str:
    """Return the singular form of ``word``."""
    return _inflect(word, _SINGLE_TO_PLURAL, _PLURAL_TO_SINGLE, _SINGULAR_RULES)


_WORD = re.compile(r"[\w']+")


def title(word: str) -> str:
    """Upper-case the first letter of each word and lower-case the rest."""
    return _WORD.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), word)