"""Relevance scoring of provider food records against a search query."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from food_search.domain.nutrition import DataType, RawCandidate
from food_search.services.similarity import similarity

DATA_SOURCE_PRIORITY: Mapping[str, float] = MappingProxyType(
    {
        DataType.FOUNDATION.value: 0.25,
        DataType.SR_LEGACY.value: 0.20,
        DataType.SURVEY.value: 0.10,
        DataType.BRANDED.value: 0.0,
    }
)

CHAIN_BRANDS: tuple[str, ...] = (
    "denny's",
    "cracker barrel",
    "taco bell",
    "applebee's",
    "mcdonald's",
    "t.g.i. friday's",
    "burger king",
    "wendy's",
    "kfc",
    "pizza hut",
    "domino's",
    "papa john's",
    "subway",
    "chipotle",
    "panera",
    "starbucks",
    "restaurant",
    "chain",
)

COMPLEX_TERMS: tuple[str, ...] = (
    "prepared",
    "recipe",
    "homemade",
    "mixed",
    "dish",
    "meal",
    "frozen meal",
    "with sauce",
    "in sauce",
    "seasoned",
    "marinated",
    "stuffed",
    "breaded",
    "battered",
    "fried",
    "cooked with",
    "fast food",
    "salisbury",
    "sauce",
    "gravy",
    "burrito",
    "taco",
    "soft taco",
    "fries",
)

BASIC_CUTS: tuple[str, ...] = (
    "beef, chuck",
    "beef, round",
    "beef, loin",
    "beef, rib",
    "beef, brisket",
    "beef, flank",
    "beef, sirloin",
    "pork, loin",
    "pork, shoulder",
    "chicken breast",
    "chicken thigh",
    "chicken, broilers",
    "turkey, all classes",
    "fish, salmon",
    "fish, tuna",
    "lamb, domestic",
)

BASIC_PREPARATION_TERMS: tuple[str, ...] = (
    "raw",
    "fresh",
    "plain",
    "unseasoned",
    "lean",
    "ground",
    "boneless",
)

_TOKEN_SPLIT = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class RelevanceRules:
    """Lookup tables and weights used by the relevance heuristic."""

    data_source_priority: Mapping[str, float] = field(
        default_factory=lambda: DATA_SOURCE_PRIORITY
    )
    chain_brands: tuple[str, ...] = CHAIN_BRANDS
    complex_terms: tuple[str, ...] = COMPLEX_TERMS
    basic_cuts: tuple[str, ...] = BASIC_CUTS
    basic_preparation_terms: tuple[str, ...] = BASIC_PREPARATION_TERMS
    brand_word_boost: float = 0.5
    brand_phrase_boost: float = 0.4
    exact_name_boost: float = 0.5
    exact_token_boost: float = 0.4
    prefix_boost: float = 0.3
    chain_penalty: float = 0.4
    complex_penalty: float = 0.3
    ingredient_list_penalty: float = 0.15
    parenthetical_penalty: float = 0.05
    basic_cut_boost: float = 0.35
    basic_preparation_boost: float = 0.15


DEFAULT_RULES = RelevanceRules()


@dataclass(frozen=True)
class RelevanceBreakdown:
    """Named score contributions for one candidate."""

    terms: tuple[tuple[str, float], ...] = field(default_factory=tuple)

    @property
    def total(self) -> float:
        """Unclamped sum of all contributions."""
        return sum(value for _, value in self.terms)

    @property
    def score(self) -> float:
        """Final relevance score, floored at zero with no upper cap."""
        return max(0.0, self.total)

    def term(self, name: str) -> float:
        """Return the contribution recorded under ``name`` (0 if absent)."""
        return sum(value for label, value in self.terms if label == name)

    def without(self, name: str) -> float:
        """Return the clamped score with one contribution removed."""
        return max(0.0, self.total - self.term(name))


def score_relevance(
    candidate: RawCandidate, query: str, rules: RelevanceRules = DEFAULT_RULES
) -> float:
    """Score how well a provider record matches a query."""
    return explain_relevance(candidate, query, rules).score


def explain_relevance(  # noqa: PLR0912
    candidate: RawCandidate, query: str, rules: RelevanceRules = DEFAULT_RULES
) -> RelevanceBreakdown:
    """Compute each relevance contribution for a provider record."""
    name = candidate.description.lower()
    brand = (candidate.brand or "").lower()
    term = query.lower()
    terms: list[tuple[str, float]] = [("similarity", similarity(name, term))]

    if brand and " " in term:
        for word in term.split(" "):
            if len(word) > 2 and word in brand:
                terms.append(("brand_word", rules.brand_word_boost))
    elif brand and term in brand:
        terms.append(("brand_phrase", rules.brand_phrase_boost))

    if name == term:
        terms.append(("exact_name", rules.exact_name_boost))

    words = _tokens(name)
    query_words = _tokens(term)
    if len(query_words) == 1 and query_words[0] in words:
        terms.append(("exact_token", rules.exact_token_boost))

    if name.startswith(term):
        terms.append(("prefix", rules.prefix_boost))

    source_bonus = rules.data_source_priority.get(candidate.data_type or "", 0.0)
    if source_bonus:
        terms.append(("data_source", source_bonus))

    word_count_adjustment = _word_count_adjustment(len(words))
    if word_count_adjustment:
        terms.append(("word_count", word_count_adjustment))

    if _contains_any(name, rules.chain_brands):
        terms.append(("chain_brand", -rules.chain_penalty))
    if _contains_any(name, rules.complex_terms):
        terms.append(("complex_preparation", -rules.complex_penalty))
    if "," in name and len(name.split(",")) > 2:
        terms.append(("ingredient_list", -rules.ingredient_list_penalty))
    if "(" in name and ")" in name:
        terms.append(("parenthetical", -rules.parenthetical_penalty))
    if _contains_any(name, rules.basic_cuts):
        terms.append(("basic_cut", rules.basic_cut_boost))
    if _contains_any(name, rules.basic_preparation_terms):
        terms.append(("basic_preparation", rules.basic_preparation_boost))

    return RelevanceBreakdown(terms=tuple(terms))


def _tokens(text: str) -> list[str]:
    """Split on whitespace and commas, dropping empty pieces."""
    return [token for token in _TOKEN_SPLIT.split(text) if token]


def _word_count_adjustment(word_count: int) -> float:
    """Favor short, simple names and penalize long compound ones."""
    if word_count <= 2:
        return 0.30
    if word_count <= 4:
        return 0.15
    if word_count <= 6:
        return 0.05
    if word_count >= 8:
        return -0.20
    return 0.0


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)
