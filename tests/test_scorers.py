"""Tests des scores d'en-tête."""

from fieldmap.matching.scorers import bigram_similarity, bigrams, header_score, is_excluded, synonym_score
from fieldmap.synonyms import FIELD_SYNONYMS


def test_bigrams() -> None:
    assert bigrams("abc") == ["ab", "bc"]
    assert bigrams("aaa") == ["aa", "aa"]
    assert bigrams("a") == []


def test_bigram_similarity_identical() -> None:
    assert bigram_similarity("email", "email") == 1.0
    assert bigram_similarity("aaa", "aaa") == 1.0


def test_bigram_similarity_too_short() -> None:
    assert bigram_similarity("email", "") == 0.0
    assert bigram_similarity("a", "a") == 0.0


def test_bigram_similarity_filter_semantics() -> None:
    """Les bigrammes répétés de `a` comptent chacun : le score n'est pas symétrique."""
    assert bigram_similarity("aaa", "aab") == 1.0
    assert bigram_similarity("aab", "aaa") == 0.5


def test_header_score_exact() -> None:
    assert header_score("email address", "email address", []) == (100, "Exact header match")


def test_header_score_containment() -> None:
    assert header_score("email address", "email", []) == (80, "Similar header match")
    assert header_score("name", "first name", []) == (80, "Similar header match")


def test_header_score_synonym_exact() -> None:
    assert header_score("e mail", "email", FIELD_SYNONYMS["email"]) == (75, 'Synonym match: "e-mail"')


def test_header_score_synonym_containment() -> None:
    assert header_score("cell no", "phone", FIELD_SYNONYMS["phone"]) == (65, 'Synonym match: "cell"')


def test_header_score_fuzzy() -> None:
    # adress / address : 5 bigrammes communs sur 5 + 6 -> 0.909 -> floor(54.5)
    assert header_score("adress", "address", []) == (54, "Similar header name")


def test_header_score_no_match() -> None:
    assert header_score("zip", "email", []) == (0, None)
    assert header_score("", "email", ["mail"]) == (0, None)


def test_synonym_score_none() -> None:
    assert synonym_score("zip code", FIELD_SYNONYMS["email"]) is None
    assert synonym_score("zip code", []) is None


def test_is_excluded_full_name() -> None:
    assert is_excluded("full name", "firstName")
    assert is_excluded("customer fullname", "lastName")
    assert not is_excluded("full name", "email")
    assert not is_excluded("first name", "firstName")
