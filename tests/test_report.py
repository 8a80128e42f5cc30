"""Tests du module report."""

import pytest

from fieldmap.config import Config
from fieldmap.matching.schema import ColumnMapping, FieldMatch, OwnerColumnMatch
from fieldmap.report import build_mapping_df, build_report_df, print_report_console


@pytest.fixture
def sample_mappings() -> list[ColumnMapping]:
    return [
        ColumnMapping(
            "Email",
            0,
            [FieldMatch("email", "Email", "high", 100, "Exact header match")],
            selected_field="email",
            sample_data=["ann@example.com"],
        ),
        ColumnMapping(
            "Cell",
            1,
            [
                FieldMatch("phone", "Phone", "medium", 65, 'Synonym match: "cell"'),
                FieldMatch("email", "Email", "low", 30, "Possible match"),
            ],
        ),
        ColumnMapping("Colour", 2, [], is_custom_field=True),
        ColumnMapping(
            "E-mail",
            3,
            [],
            is_custom_field=True,
            conflicts=[FieldMatch("email", "Email", "high", 95, 'Synonym match: "e-mail"')],
        ),
    ]


@pytest.fixture
def owner() -> OwnerColumnMatch:
    return OwnerColumnMatch("Agent Email", 4, 96, 95, 1.0)


def test_build_mapping_df(sample_mappings: list[ColumnMapping]) -> None:
    df = build_mapping_df(sample_mappings)
    assert len(df) == 4
    assert df["column"].tolist() == ["Email", "Cell", "Colour", "E-mail"]
    assert df["selected_field"].tolist() == ["email", "", "", ""]
    assert df["top_score"].tolist() == [100, 65, 0, 0]
    assert df.loc[1, "alternatives"] == "email (30)"
    assert df.loc[3, "conflicts"] == "email (95)"
    assert df.loc[0, "samples"] == "ann@example.com"


def test_build_mapping_df_empty() -> None:
    df = build_mapping_df([])
    assert df.empty
    assert "top_field" in df.columns


def test_build_report_df(sample_mappings: list[ColumnMapping], owner: OwnerColumnMatch) -> None:
    df = build_report_df(sample_mappings, Config(), owner)
    values = dict(zip(df["Key"], df["Value"]))
    assert values["nb_columns"] == 4
    assert values["nb_selected"] == 1
    assert values["nb_custom"] == 2
    assert values["nb_high"] == 1
    assert values["nb_medium"] == 1
    assert values["nb_conflicts"] == 1
    assert values["owner_column"] == "Agent Email"
    assert values["top_k"] == 3
    assert values["email"] == "Email (email, core)"
    assert "version" in values


def test_print_report_console(
    sample_mappings: list[ColumnMapping],
    owner: OwnerColumnMatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    print_report_console(sample_mappings, owner)
    out = capsys.readouterr().out
    assert "FieldMap Report" in out
    assert "'Email' -> email score=100 [high]" in out
    assert "(aucune suggestion)" in out
    assert "'Agent Email' (score=96)" in out


def test_print_report_console_without_owner(capsys: pytest.CaptureFixture[str]) -> None:
    print_report_console([], None)
    assert "Colonne agent:    aucune" in capsys.readouterr().out
