"""Catalog of recognizers for political entities.

Each :class:`Matcher` pairs a compiled pattern with the category it yields,
the base priority used by the scorer and an optional alias table mapping
surface forms to canonical names. Closed lists are compiled as a single
alternation sorted longest alternative first, so "Medicare Advantage" is tried
before "Medicare" at the same position. Open-ended recognizers ("... Act",
"... Committee") additionally run a validator that rejects generic or
non-political phrases.

Curated lists come before open-ended recognizers in the default library. When
two candidates cover the same text with the same score, the one produced
first wins, so the curated reading is kept.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Mapping

from .models import Category

# Weights used as the starting point of the relevance score. Closed lists are
# curated and therefore trusted more than open-ended recognizers.
KNOWN_LEGISLATION_WEIGHT = 10.0
SPECIFIC_ENTITY_WEIGHT = 9.0
GENERIC_ENTITY_WEIGHT = 8.0
PROCEDURAL_PHRASE_WEIGHT = 7.0

_CAP = r"(?:(?:[A-Z]\.){2,}|[A-Z][A-Za-z'’\-]*)"
_CONN = r"(?:and|of|for|to|on|with|the|&)"
# Names never run past this many words; the bound keeps matching linear.
_MAX_NAME_WORDS = 8
_NAME_WORD = rf"\s+(?:{_CONN}\s+){{0,2}}{_CAP}"
# Leading part of a name, kept lazy so the suffix keyword anchors the match.
_NAME_HEAD = rf"{_CAP}(?:{_NAME_WORD}){{0,{_MAX_NAME_WORDS}}}?"
# Trailing part of a name, greedy so "Office of Management and Budget" is whole.
_NAME_TAIL = rf"{_CAP}(?:{_NAME_WORD}){{0,{_MAX_NAME_WORDS}}}"
_START = r"(?<![\w'’\-.])"
# Possessives ("EPA's") and hyphenated compounds ("GOP-led") end a name.
_END = r"(?!\w)"
_LEAD_STOP = (
    r"(?!(?:The|This|That|These|Those|A|An|Under|In|On|For|Of|And|But|Or|Since|"
    r"After|Before|When|While|If|As|At|By|From|With|To|Its|His|Her|Their|Our|"
    r"Your|My|Both|Each|Every|Such|Some|Any|Another|Last|Next|Yesterday|Today)\b)"
)

_GENERIC_WORDS = {
    "act",
    "agency",
    "bill",
    "bureau",
    "code",
    "commission",
    "committee",
    "department",
    "directive",
    "federal",
    "house",
    "law",
    "national",
    "new",
    "office",
    "reform",
    "regulation",
    "senate",
    "service",
    "state",
    "states",
    "subcommittee",
    "u.s.",
    "united",
    "us",
}

_NON_POLITICAL_PREFIXES = (
    re.compile(r"^(?:news|sports|entertainment|lifestyle|opinion)\b", re.I),
    re.compile(r"^(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b", re.I),
    re.compile(
        r"^(?:january|february|march|april|may|june|july|august|september|october|"
        r"november|december)\b",
        re.I,
    ),
    re.compile(r"^\d+\s+(?:street|avenue|road|lane|drive|boulevard)\b", re.I),
    re.compile(r"^(?:old|big|small|large|major|minor|says|post)\b", re.I),
    re.compile(r"^(?:box|front|home|head|ticket|customer|back)\s+office\b", re.I),
)


@dataclass(frozen=True, slots=True)
class Matcher:
    """Recognizer for one family of political entities."""

    name: str
    pattern: re.Pattern[str]
    category: Category
    base_priority: float
    explanation: str
    canonical: Mapping[str, str] = field(default_factory=dict)
    validator: Callable[[str], bool] | None = None
    canonicalizer: Callable[[str], str] | None = None
    abbreviation: bool = False

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        for match in self.pattern.finditer(text):
            if self.validator is not None and not self.validator(match.group(0)):
                continue
            yield match

    def canonical_for(self, surface: str) -> str:
        """Return the canonical name for ``surface`` or the surface itself."""

        if self.canonicalizer is not None:
            return self.canonicalizer(surface)
        return self.canonical.get(_alias_key(surface), surface)


@dataclass(frozen=True, slots=True)
class PatternLibrary:
    """Ordered, immutable collection of matchers."""

    matchers: tuple[Matcher, ...]

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self.matchers)

    def __len__(self) -> int:
        return len(self.matchers)

    def get(self, name: str | None) -> Matcher | None:
        for matcher in self.matchers:
            if matcher.name == name:
                return matcher
        return None

    def base_weight(self, name: str | None, category: Category) -> float:
        """Base priority of the named matcher, or the category default."""

        matcher = self.get(name)
        if matcher is not None:
            return matcher.base_priority
        return CATEGORY_DEFAULT_WEIGHTS[Category.parse(category)]


def _alias_key(surface: str) -> str:
    return re.sub(r"\s+", " ", surface.strip().replace("’", "'")).lower()


def _term_pattern(term: str) -> str:
    return r"\s+".join(re.escape(word) for word in term.split())


def closed_list_pattern(terms: Iterable[str], *, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile ``terms`` into a word-bounded alternation, longest first."""

    ordered = sorted(set(terms), key=lambda term: (-len(term), term))
    alternation = "|".join(_term_pattern(term) for term in ordered)
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(rf"{_START}(?:{alternation}){_END}", flags)


def closed_list(
    name: str,
    terms: Iterable[str],
    category: Category,
    base_priority: float,
    explanation: str,
    *,
    aliases: Mapping[str, str] | None = None,
    ignore_case: bool = True,
    abbreviation: bool = False,
) -> Matcher:
    """Build a matcher for a curated list of names plus their aliases."""

    terms = tuple(terms)
    aliases = dict(aliases or {})
    canonical = {_alias_key(term): term for term in terms}
    canonical.update({_alias_key(alias): target for alias, target in aliases.items()})
    return Matcher(
        name=name,
        pattern=closed_list_pattern([*terms, *aliases], ignore_case=ignore_case),
        category=category,
        base_priority=base_priority,
        explanation=explanation,
        canonical=canonical,
        abbreviation=abbreviation,
    )


def is_valid_generic_name(surface: str) -> bool:
    """Reject open-ended matches that are generic or clearly non-political."""

    words = surface.split()
    if len(words) < 2:
        return False
    body = [word.lower() for word in words[:-1] if word[:1].isupper()]
    if not body or all(word in _GENERIC_WORDS for word in body):
        return False
    return not any(pattern.search(surface) for pattern in _NON_POLITICAL_PREFIXES)


def _is_valid_agency_name(surface: str) -> bool:
    # Administrations are recognised only from the curated lists.
    if surface.split()[-1].lower() == "administration":
        return False
    return is_valid_generic_name(surface)


CATEGORY_DEFAULT_WEIGHTS = {
    Category.BILL_IDENTIFIER: SPECIFIC_ENTITY_WEIGHT,
    Category.FORMAL_LEGISLATION: SPECIFIC_ENTITY_WEIGHT,
    Category.GOVERNMENT_AGENCY: GENERIC_ENTITY_WEIGHT,
    Category.CONGRESSIONAL_COMMITTEE: GENERIC_ENTITY_WEIGHT,
    Category.POLITICAL_INSTITUTION: GENERIC_ENTITY_WEIGHT,
    Category.ENTITLEMENT_PROGRAM: SPECIFIC_ENTITY_WEIGHT,
    Category.MOVEMENT: GENERIC_ENTITY_WEIGHT,
    Category.POLICY_PHRASE: PROCEDURAL_PHRASE_WEIGHT,
    Category.OTHER: PROCEDURAL_PHRASE_WEIGHT,
}


KNOWN_LEGISLATION = (
    "Affordable Care Act",
    "American Rescue Plan",
    "American Rescue Plan Act",
    "Americans with Disabilities Act",
    "Bipartisan Safer Communities Act",
    "CARES Act",
    "CHIPS and Science Act",
    "Civil Rights Act",
    "Clean Air Act",
    "Clean Water Act",
    "Defense Production Act",
    "Dodd-Frank Act",
    "Endangered Species Act",
    "Equality Act",
    "Farm Bill",
    "Freedom of Information Act",
    "GENIUS Act",
    "Hatch Act",
    "Infrastructure Investment and Jobs Act",
    "Inflation Reduction Act",
    "Insurrection Act",
    "John Lewis Voting Rights Advancement Act",
    "Laken Riley Act",
    "Logan Act",
    "National Defense Authorization Act",
    "One Big Beautiful Bill Act",
    "Patriot Act",
    "PRO Act",
    "Respect for Marriage Act",
    "SAVE Act",
    "Social Security Act",
    "Tax Cuts and Jobs Act",
    "Voting Rights Act",
    "War Powers Resolution",
)

LEGISLATION_ALIASES = {
    "Obamacare": "Affordable Care Act",
    "Bipartisan Infrastructure Law": "Infrastructure Investment and Jobs Act",
    "Big Beautiful Bill": "One Big Beautiful Bill Act",
    "One Big Beautiful Bill": "One Big Beautiful Bill Act",
    "USA PATRIOT Act": "Patriot Act",
    "Dodd-Frank": "Dodd-Frank Act",
    "NDAA": "National Defense Authorization Act",
    "Tax Cuts and Jobs Act of 2017": "Tax Cuts and Jobs Act",
}

KNOWN_AGENCIES = (
    "Bureau of Labor Statistics",
    "Census Bureau",
    "Centers for Disease Control and Prevention",
    "Central Intelligence Agency",
    "Congressional Budget Office",
    "Consumer Financial Protection Bureau",
    "Customs and Border Protection",
    "Department of Government Efficiency",
    "Drug Enforcement Administration",
    "Environmental Protection Agency",
    "Federal Aviation Administration",
    "Federal Bureau of Investigation",
    "Federal Communications Commission",
    "Federal Deposit Insurance Corporation",
    "Federal Election Commission",
    "Federal Emergency Management Agency",
    "Federal Trade Commission",
    "Food and Drug Administration",
    "Government Accountability Office",
    "Immigration and Customs Enforcement",
    "Internal Revenue Service",
    "National Aeronautics and Space Administration",
    "National Institutes of Health",
    "National Labor Relations Board",
    "National Security Agency",
    "Nuclear Regulatory Commission",
    "Office of Management and Budget",
    "Office of Personnel Management",
    "Pentagon",
    "Securities and Exchange Commission",
    "Small Business Administration",
    "Social Security Administration",
    "Transportation Security Administration",
    "U.S. Agency for International Development",
    "United States Postal Service",
    "Veterans Health Administration",
)

AGENCY_ABBREVIATIONS = {
    "ATF": "Bureau of Alcohol, Tobacco, Firearms and Explosives",
    "BLS": "Bureau of Labor Statistics",
    "CBO": "Congressional Budget Office",
    "CBP": "Customs and Border Protection",
    "CDC": "Centers for Disease Control and Prevention",
    "CFPB": "Consumer Financial Protection Bureau",
    "CIA": "Central Intelligence Agency",
    "DEA": "Drug Enforcement Administration",
    "DHS": "Department of Homeland Security",
    "DOD": "Department of Defense",
    "DoD": "Department of Defense",
    "DOGE": "Department of Government Efficiency",
    "DOJ": "Department of Justice",
    "EPA": "Environmental Protection Agency",
    "FAA": "Federal Aviation Administration",
    "FBI": "Federal Bureau of Investigation",
    "FCC": "Federal Communications Commission",
    "FDA": "Food and Drug Administration",
    "FDIC": "Federal Deposit Insurance Corporation",
    "FEC": "Federal Election Commission",
    "FEMA": "Federal Emergency Management Agency",
    "FTC": "Federal Trade Commission",
    "GAO": "Government Accountability Office",
    "HHS": "Department of Health and Human Services",
    "HUD": "Department of Housing and Urban Development",
    "ICE": "Immigration and Customs Enforcement",
    "IRS": "Internal Revenue Service",
    "NASA": "National Aeronautics and Space Administration",
    "NIH": "National Institutes of Health",
    "NLRB": "National Labor Relations Board",
    "NSA": "National Security Agency",
    "OMB": "Office of Management and Budget",
    "OSHA": "Occupational Safety and Health Administration",
    "SBA": "Small Business Administration",
    "SEC": "Securities and Exchange Commission",
    "TSA": "Transportation Security Administration",
    "USAID": "U.S. Agency for International Development",
    "USDA": "Department of Agriculture",
    "USPS": "United States Postal Service",
}

PRESIDENTIAL_SURNAMES = (
    "Biden",
    "Bush",
    "Carter",
    "Clinton",
    "Eisenhower",
    "Ford",
    "Johnson",
    "Kennedy",
    "Nixon",
    "Obama",
    "Reagan",
    "Roosevelt",
    "Truman",
    "Trump",
)

DEPARTMENT_SHORT_NAMES = (
    "Agriculture",
    "Commerce",
    "Defense",
    "Education",
    "Energy",
    "Homeland Security",
    "Interior",
    "Justice",
    "Labor",
    "State",
    "Transportation",
    "Treasury",
)

POLITICAL_INSTITUTIONS = (
    "Capitol Hill",
    "Congress",
    "Democratic National Committee",
    "Democratic Party",
    "Electoral College",
    "Federal Reserve",
    "House",
    "House of Representatives",
    "Joint Chiefs of Staff",
    "Republican National Committee",
    "Republican Party",
    "Senate",
    "Supreme Court",
    "White House",
)

INSTITUTION_ALIASES = {
    "the Fed": "Federal Reserve",
    "The Fed": "Federal Reserve",
    "GOP": "Republican Party",
    "SCOTUS": "Supreme Court",
    "DNC": "Democratic National Committee",
    "RNC": "Republican National Committee",
}

ENTITLEMENT_PROGRAMS = (
    "Child Tax Credit",
    "Children's Health Insurance Program",
    "Earned Income Tax Credit",
    "Head Start",
    "Medicaid",
    "Medicare",
    "Medicare Advantage",
    "Pell Grants",
    "Social Security",
    "Supplemental Nutrition Assistance Program",
    "Supplemental Security Income",
    "Temporary Assistance for Needy Families",
)

PROGRAM_ALIASES = {
    "Food Stamps": "SNAP",
    "food stamps": "SNAP",
    "Pell Grant": "Pell Grants",
}

PROGRAM_ABBREVIATIONS = {
    "SNAP": "SNAP",
    "CHIP": "Children's Health Insurance Program",
    "TANF": "Temporary Assistance for Needy Families",
    "WIC": "WIC",
    "PEPFAR": "PEPFAR",
    "SSI": "Supplemental Security Income",
    "EITC": "Earned Income Tax Credit",
}

MOVEMENTS = (
    "America First",
    "Antifa",
    "Black Lives Matter",
    "Green New Deal",
    "Make America Great Again",
    "Medicare for All",
    "Occupy Wall Street",
    "Proud Boys",
    "QAnon",
    "Tea Party",
)

MOVEMENT_ALIASES = {
    "Make America Great Again movement": "Make America Great Again",
    "MAGA movement": "Make America Great Again",
    "Tea Party movement": "Tea Party",
}

MOVEMENT_ABBREVIATIONS = {
    "MAGA": "Make America Great Again",
    "BLM": "Black Lives Matter",
}

POLICY_PHRASES = (
    "appropriations bill",
    "budget reconciliation",
    "cloture vote",
    "continuing resolution",
    "debt ceiling",
    "debt limit",
    "executive order",
    "filibuster",
    "government shutdown",
    "impeachment inquiry",
    "national emergency declaration",
    "nuclear option",
    "omnibus bill",
    "omnibus spending package",
    "reconciliation bill",
    "rescissions bill",
    "rescissions package",
    "spending bill",
    "stopgap funding bill",
    "stopgap spending bill",
    "veto override",
)

OTHER_AGREEMENTS = (
    "Geneva Conventions",
    "Iran Nuclear Deal",
    "Joint Comprehensive Plan of Action",
    "Kyoto Protocol",
    "Paris Agreement",
    "Paris Climate Agreement",
    "Trans-Pacific Partnership",
)

OTHER_ABBREVIATIONS = {
    "NAFTA": "North American Free Trade Agreement",
    "USMCA": "United States-Mexico-Canada Agreement",
    "JCPOA": "Joint Comprehensive Plan of Action",
    "NATO": "North Atlantic Treaty Organization",
    "TPP": "Trans-Pacific Partnership",
}


_BILL_NUMBER = re.compile(
    rf"{_START}(?:H\.\s?J\.\s?Res\.|S\.\s?J\.\s?Res\.|H\.\s?Con\.\s?Res\.|"
    rf"S\.\s?Con\.\s?Res\.|H\.\s?Res\.|S\.\s?Res\.|H\.\s?R\.|S\.|HR|SB|HB|AB)"
    rf"\s?\d{{1,5}}\b"
)
_NUMBERED_INSTRUMENT = re.compile(
    rf"{_START}(?:EU|UK|US)\s+(?:Regulation|Directive)\s+(?:\((?:EU|EC)\)\s+)?"
    rf"\d{{2,4}}/\d{{1,4}}(?:/[A-Z]{{2,3}})?\b"
)
_GENERIC_LEGISLATION = re.compile(
    rf"{_START}{_LEAD_STOP}{_NAME_HEAD}\s+(?:Act|Bill|Law|Code|Reform|Regulation|Directive)"
    rf"(?:\s+of\s+\d{{4}})?{_END}"
)
_DEPARTMENT = re.compile(
    rf"{_START}(?:Department\s+of\s+(?:the\s+)?{_CAP}(?:\s+(?:and\s+|&\s+)?{_CAP}){{0,2}}"
    rf"|(?:{'|'.join(_term_pattern(name) for name in DEPARTMENT_SHORT_NAMES)})\s+Department)"
    rf"{_END}"
)
_GENERIC_AGENCY = re.compile(
    rf"{_START}{_LEAD_STOP}{_NAME_HEAD}\s+(?:Agency|Commission|Bureau|Office|Service)"
    rf"(?:\s+(?:of|for|on)\s+(?:the\s+)?{_NAME_TAIL})?{_END}"
)
_ADMINISTRATION = re.compile(
    rf"{_START}(?:{'|'.join(PRESIDENTIAL_SURNAMES)})(?:'s)?\s+[Aa]dministration{_END}"
)
_CHAMBER_COMMITTEE = re.compile(
    rf"{_START}(?:House|Senate)(?:{_NAME_WORD}){{0,{_MAX_NAME_WORDS}}}?\s+"
    rf"(?:Committee|Subcommittee)(?:\s+on\s+(?:the\s+)?{_NAME_TAIL})?{_END}"
)
_GENERIC_COMMITTEE = re.compile(
    rf"{_START}{_LEAD_STOP}{_NAME_HEAD}\s+(?:Committee|Subcommittee)"
    rf"(?:\s+of\s+the\s+(?:House|Senate))?{_END}"
)


def administration_canonical(surface: str) -> str:
    """``"Biden's administration"`` -> ``"Biden Administration"``."""

    surname = surface.split()[0]
    if surname.endswith("'s"):
        surname = surname[:-2]
    return f"{surname} Administration"


def _department_aliases() -> dict[str, str]:
    aliases = {}
    for name in DEPARTMENT_SHORT_NAMES:
        full = "Department of the Treasury" if name == "Treasury" else f"Department of {name}"
        aliases[_alias_key(f"{name} Department")] = full
    return aliases


def build_default_library() -> PatternLibrary:
    """Return the default, ordered catalog of political-entity recognizers."""

    matchers = [
        Matcher(
            name="bill_number",
            pattern=_BILL_NUMBER,
            category=Category.BILL_IDENTIFIER,
            base_priority=SPECIFIC_ENTITY_WEIGHT,
            explanation="Specific bill or resolution number",
        ),
        Matcher(
            name="numbered_instrument",
            pattern=_NUMBERED_INSTRUMENT,
            category=Category.BILL_IDENTIFIER,
            base_priority=SPECIFIC_ENTITY_WEIGHT,
            explanation="Numbered regulation or directive",
        ),
        closed_list(
            "known_legislation",
            KNOWN_LEGISLATION,
            Category.FORMAL_LEGISLATION,
            KNOWN_LEGISLATION_WEIGHT,
            "Landmark federal legislation",
            aliases=LEGISLATION_ALIASES,
        ),
        closed_list(
            "known_agency",
            KNOWN_AGENCIES,
            Category.GOVERNMENT_AGENCY,
            SPECIFIC_ENTITY_WEIGHT,
            "Federal agency",
        ),
        Matcher(
            name="presidential_administration",
            pattern=_ADMINISTRATION,
            category=Category.GOVERNMENT_AGENCY,
            base_priority=SPECIFIC_ENTITY_WEIGHT,
            explanation="Presidential administration",
            canonicalizer=administration_canonical,
        ),
        closed_list(
            "political_institution",
            POLITICAL_INSTITUTIONS,
            Category.POLITICAL_INSTITUTION,
            GENERIC_ENTITY_WEIGHT,
            "Political institution",
            aliases=INSTITUTION_ALIASES,
            ignore_case=False,
        ),
        closed_list(
            "entitlement_program",
            ENTITLEMENT_PROGRAMS,
            Category.ENTITLEMENT_PROGRAM,
            SPECIFIC_ENTITY_WEIGHT,
            "Federal benefit program",
            aliases=PROGRAM_ALIASES,
            ignore_case=False,
        ),
        closed_list(
            "movement",
            MOVEMENTS,
            Category.MOVEMENT,
            GENERIC_ENTITY_WEIGHT,
            "Political movement",
            aliases=MOVEMENT_ALIASES,
            ignore_case=False,
        ),
        closed_list(
            "international_agreement",
            OTHER_AGREEMENTS,
            Category.OTHER,
            PROCEDURAL_PHRASE_WEIGHT,
            "International agreement",
        ),
        closed_list(
            "policy_phrase",
            POLICY_PHRASES,
            Category.POLICY_PHRASE,
            PROCEDURAL_PHRASE_WEIGHT,
            "Legislative or executive procedure",
        ),
        Matcher(
            name="named_legislation",
            pattern=_GENERIC_LEGISLATION,
            category=Category.FORMAL_LEGISLATION,
            base_priority=SPECIFIC_ENTITY_WEIGHT,
            explanation="Named piece of legislation",
            validator=is_valid_generic_name,
        ),
        Matcher(
            name="department",
            pattern=_DEPARTMENT,
            category=Category.GOVERNMENT_AGENCY,
            base_priority=GENERIC_ENTITY_WEIGHT,
            explanation="Executive department",
            canonical=_department_aliases(),
        ),
        Matcher(
            name="named_agency",
            pattern=_GENERIC_AGENCY,
            category=Category.GOVERNMENT_AGENCY,
            base_priority=GENERIC_ENTITY_WEIGHT,
            explanation="Government agency or office",
            validator=_is_valid_agency_name,
        ),
        Matcher(
            name="chamber_committee",
            pattern=_CHAMBER_COMMITTEE,
            category=Category.CONGRESSIONAL_COMMITTEE,
            base_priority=GENERIC_ENTITY_WEIGHT,
            explanation="Congressional committee",
        ),
        Matcher(
            name="named_committee",
            pattern=_GENERIC_COMMITTEE,
            category=Category.CONGRESSIONAL_COMMITTEE,
            base_priority=GENERIC_ENTITY_WEIGHT,
            explanation="Legislative committee",
            validator=is_valid_generic_name,
        ),
        closed_list(
            "legislation_abbreviation",
            (),
            Category.FORMAL_LEGISLATION,
            SPECIFIC_ENTITY_WEIGHT,
            "Abbreviated legislation name",
            aliases={"ACA": "Affordable Care Act"},
            ignore_case=False,
            abbreviation=True,
        ),
        closed_list(
            "agency_abbreviation",
            (),
            Category.GOVERNMENT_AGENCY,
            SPECIFIC_ENTITY_WEIGHT,
            "Government agency abbreviation",
            aliases=AGENCY_ABBREVIATIONS,
            ignore_case=False,
            abbreviation=True,
        ),
        closed_list(
            "program_abbreviation",
            (),
            Category.ENTITLEMENT_PROGRAM,
            SPECIFIC_ENTITY_WEIGHT,
            "Federal benefit program abbreviation",
            aliases=PROGRAM_ABBREVIATIONS,
            ignore_case=False,
            abbreviation=True,
        ),
        closed_list(
            "movement_abbreviation",
            (),
            Category.MOVEMENT,
            GENERIC_ENTITY_WEIGHT,
            "Political movement abbreviation",
            aliases=MOVEMENT_ABBREVIATIONS,
            ignore_case=False,
            abbreviation=True,
        ),
        closed_list(
            "agreement_abbreviation",
            (),
            Category.OTHER,
            PROCEDURAL_PHRASE_WEIGHT,
            "International agreement abbreviation",
            aliases=OTHER_ABBREVIATIONS,
            ignore_case=False,
            abbreviation=True,
        ),
    ]
    return PatternLibrary(tuple(matchers))


DEFAULT_PATTERN_LIBRARY = build_default_library()


__all__ = [
    "CATEGORY_DEFAULT_WEIGHTS",
    "DEFAULT_PATTERN_LIBRARY",
    "GENERIC_ENTITY_WEIGHT",
    "KNOWN_LEGISLATION_WEIGHT",
    "Matcher",
    "PROCEDURAL_PHRASE_WEIGHT",
    "PatternLibrary",
    "SPECIFIC_ENTITY_WEIGHT",
    "administration_canonical",
    "build_default_library",
    "closed_list",
    "closed_list_pattern",
    "is_valid_generic_name",
]
