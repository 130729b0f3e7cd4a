from __future__ import annotations

from job_triage.text import canonical, extract_requirements, strip_markup, truncate


def test_strip_markup_removes_tags_entities_and_extra_whitespace() -> None:
    assert strip_markup("<p>Vente &amp;   achats</p>\n<br/>Retail") == "Vente & achats Retail"


def test_strip_markup_handles_empty_values() -> None:
    assert strip_markup(None) == ""
    assert strip_markup("") == ""


def test_truncate_only_adds_suffix_when_cut() -> None:
    assert truncate("court", 150) == "court"
    assert truncate("x" * 200, 150) == "x" * 150 + "..."


def test_canonical_folds_accents_and_punctuation() -> None:
    assert canonical("Négociation") == "negociation"
    assert canonical("Category Management") == "categorymanagement"
    assert canonical("P&L") == "pl"


def test_extract_requirements_reads_list_items() -> None:
    html = "<p>Profil :</p><ul><li>Négociation</li><li>Anglais courant</li><li>ok</li></ul>"

    assert extract_requirements(html) == ["Négociation", "Anglais courant"]


def test_extract_requirements_dedupes_and_caps() -> None:
    text = "\n".join(f"- Compétence {i % 5}" for i in range(20))

    items = extract_requirements(text, max_items=3)

    assert items == ["Compétence 0", "Compétence 1", "Compétence 2"]
