"""
Tests for the heuristic table parser.
"""

import dataclasses

import pytest

from embedcloud import (
    CfgParse, ColumnRoles, ROLE_CANDIDATES, Point,
    build_synthetic_csv, parse_table, resolve_roles,
)
from embedcloud.table_parse import detect_delimiter, normalize_header, resolve_cluster


# ---------------- round trip with the synthetic fixture ----------------

@pytest.mark.parametrize("n", [0, 1, 7, 180])
def test_round_trip_cardinality(n):
    assert len(parse_table(build_synthetic_csv(n))) == n


def test_round_trip_clusters_ids_and_bounds():
    points = parse_table(build_synthetic_csv(120))
    for i, p in enumerate(points):
        assert p.cluster == i % 4
        assert p.id == str(i)
        assert p.label is None
        for v in (p.x, p.y, p.z):
            assert -1.0 <= v <= 1.0


def test_round_trip_values_match_text():
    text = build_synthetic_csv(3)
    row = text.split("\n")[2].split(",")
    p = parse_table(text)[1]
    assert (p.x, p.y, p.z) == (float(row[1]), float(row[2]), float(row[3]))


# ---------------- degenerate input ----------------

@pytest.mark.parametrize("text", ["", "onlyheader", "   \n\n  ", "x,y,z", "1,2,3"])
def test_empty_or_single_line(text):
    assert parse_table(text) == []


# ---------------- delimiter ----------------

def test_detect_delimiter():
    assert detect_delimiter("a\tb\tc") == "\t"
    assert detect_delimiter("a,b,c") == ","
    # ties go to comma
    assert detect_delimiter("a\tb,c") == ","
    assert detect_delimiter("abc") == ","


def test_tab_delimited():
    points = parse_table("a\tb\tc\n1\t2\t3")
    assert len(points) == 1
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)


def test_tab_decision_applies_to_all_rows():
    """Rows are split on the first line's delimiter even if they contain commas."""
    points = parse_table("x\ty\tz\n1\t2\t3\n4,5,6")
    # "4,5,6" is one cell under tab splitting -> only one number -> dropped
    assert len(points) == 1


# ---------------- header / roles ----------------

def test_normalize_header():
    assert normalize_header("UMAP-1") == "umap1"
    assert normalize_header(" Sample ID ") == "sampleid"
    assert normalize_header("t_SNE 2") == "tsne2"


def test_resolve_roles_aliases():
    roles = resolve_roles(["UUID", "Name", "UMAP-1", "UMAP_2", "umap 3", "Group"])
    assert roles == ColumnRoles(x=2, y=3, z=4, id=0, label=1, cluster=5)


def test_resolve_roles_first_match_wins():
    roles = resolve_roles(["x", "X", "y", "z"])
    assert roles.x == 0


def test_resolve_roles_not_found():
    roles = resolve_roles(["a", "b", "c"])
    assert roles == ColumnRoles()
    assert not roles.has_xyz()


def test_header_roles_drive_extraction():
    text = "UUID,Name,UMAP-1,UMAP_2,umap 3,Group\nu1,alpha,0.1,0.2,0.3,2\nu2,,0.4,0.5,0.6,\n"
    a, b = parse_table(text)
    assert a == Point(id="u1", label="alpha", x=0.1, y=0.2, z=0.3, cluster=2, radius=2.0)
    assert b.id == "u2"
    assert b.label is None
    assert b.cluster == 0
    assert (b.x, b.y, b.z) == (0.4, 0.5, 0.6)


def test_reordered_columns():
    points = parse_table("z,label,y,x\n3,foo,2,1")
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)
    assert points[0].label == "foo"


# ---------------- fallback scan ----------------

def test_headerless_numeric_fallback():
    """Without a header the first three numbers are taken, leading id included."""
    a, b = parse_table("1,0.1,0.2,0.3\n2,0.4,0.5,0.6")
    assert (a.x, a.y, a.z) == (1.0, 0.1, 0.2)
    assert (b.x, b.y, b.z) == (2.0, 0.4, 0.5)
    assert (a.id, b.id) == ("0", "1")
    assert a.cluster == b.cluster == 0


def test_fallback_when_role_cell_is_bad():
    points = parse_table("x,y,z,w\n1,abc,2,3")
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)


def test_fallback_skips_text_cells():
    points = parse_table("name,a,b,c\nfoo,0.5,bar,1.5,2.5")
    assert (points[0].x, points[0].y, points[0].z) == (0.5, 1.5, 2.5)


def test_missing_role_cells_use_fallback():
    """Short rows: role indices past the end read as empty."""
    points = parse_table("id,x,y,z\n1,2,3")
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)


# ---------------- row rejection and ordinals ----------------

def test_row_rejection_keeps_ordinals_dense():
    points = parse_table("x,y,z\n1,2,3\nfoo,bar,1\n4,5,6")
    assert [p.id for p in points] == ["0", "1"]
    assert [p.radius for p in points] == [2.0, pytest.approx(2.35)]


def test_non_finite_rows_dropped():
    points = parse_table("x,y,z\nInfinity,1,2\ninf,1,2\n1,2,3")
    assert len(points) == 1
    assert points[0].id == "0"


def test_blank_rows_ignored():
    points = parse_table("x,y,z\n1,2,3\n\n   \n4,5,6")
    assert [p.id for p in points] == ["0", "1"]


def test_crlf_lines():
    points = parse_table("x,y,z\r\n1,2,3\r\n4,5,6\r\n")
    assert len(points) == 2


def test_empty_id_cell_falls_back_to_ordinal():
    points = parse_table("id,x,y,z\n,1,2,3\nabc,4,5,6")
    assert [p.id for p in points] == ["0", "abc"]


def test_radius_cycles_every_eight():
    text = "x,y,z\n" + "\n".join("1,2,3" for _ in range(10))
    radii = [p.radius for p in parse_table(text)]
    assert radii[0] == radii[8] == 2.0
    assert radii[7] == pytest.approx(2.0 + 7 * 0.35)
    assert radii[9] == pytest.approx(2.35)


# ---------------- clusters ----------------

def test_categorical_clusters_first_seen_order():
    text = "x,y,z,category\n0,0,0,red\n1,1,1,blue\n2,2,2,red"
    assert [p.cluster for p in parse_table(text)] == [0, 1, 0]
    # fresh mapping on every call
    assert [p.cluster for p in parse_table(text)] == [0, 1, 0]
    assert [p.cluster for p in parse_table("x,y,z,type\n0,0,0,blue\n1,1,1,red")] == [0, 1]


def test_numeric_clusters_used_directly():
    text = "x,y,z,cluster\n1,2,3,-2\n1,2,3,3.7\n1,2,3,7"
    assert [p.cluster for p in parse_table(text)] == [-2, 3, 7]


def test_mixed_clusters_do_not_consume_map_slots():
    text = "x,y,z,class\n1,2,3,5\n1,2,3,cat\n1,2,3,\n1,2,3,dog"
    assert [p.cluster for p in parse_table(text)] == [5, 0, 0, 1]


def test_resolve_cluster_updates_map():
    m = {}
    assert resolve_cluster("a", m) == 0
    assert resolve_cluster("b", m) == 1
    assert resolve_cluster("a", m) == 0
    assert resolve_cluster("", m) == 0
    assert m == {"a": 0, "b": 1}


# ---------------- config / types ----------------

def test_custom_role_candidates():
    cfg = CfgParse(role_candidates={**ROLE_CANDIDATES, "x": ("east",), "y": ("north",), "z": ("up",)})
    points = parse_table("up,north,east\n3,2,1", cfg)
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)


def test_custom_radius():
    cfg = CfgParse(radius_base=1.0, radius_step=0.5, radius_cycle=2)
    text = "x,y,z\n1,2,3\n1,2,3\n1,2,3"
    assert [p.radius for p in parse_table(text, cfg)] == [1.0, 1.5, 1.0]


def test_points_are_frozen():
    p = parse_table("x,y,z\n1,2,3")[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 5.0


def test_progress_report(capsys):
    parse_table("x,y,z\n1,2,3\nbad\n", progress_report=True)
    out = capsys.readouterr().out
    assert "[parse] skip: row=2, reason=no-xyz" in out
    assert "[parse] done: points=1, skipped=1" in out


def test_silent_by_default(capsys):
    parse_table("x,y,z\n1,2,3\nbad\n")
    assert capsys.readouterr().out == ""


# ---------------- non-ascii input ----------------

def test_non_ascii_digit_rows_dropped():
    points = parse_table("x,y,z\n١,٢,٣\n1,2,3")
    assert len(points) == 1
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)
    assert points[0].id == "0"


def test_non_ascii_digit_clusters_are_categorical():
    text = "x,y,z,cluster\n1,2,3,٣\n1,2,3,３\n1,2,3,٣"
    assert [p.cluster for p in parse_table(text)] == [0, 1, 0]


def test_leading_bom_stripped():
    """A byte-order mark does not hide the first data row."""
    a, b = parse_table("\ufeff1,2,3\n4,5,6")
    assert (a.id, a.x, a.y, a.z) == ("0", 1.0, 2.0, 3.0)
    assert (b.id, b.x, b.y, b.z) == ("1", 4.0, 5.0, 6.0)


def test_leading_bom_before_header():
    points = parse_table("\ufeffx,y,z\n1,2,3")
    assert len(points) == 1
    assert (points[0].x, points[0].y, points[0].z) == (1.0, 2.0, 3.0)


def test_partial_roles_go_straight_to_fallback():
    """With only some of x/y/z resolved, the row is read by scanning."""
    roles = resolve_roles(["x", "a", "b", "c"])
    assert roles.x == 0 and not roles.has_xyz()
    points = parse_table("x,a,b,c\nfoo,4,5,6")
    assert (points[0].x, points[0].y, points[0].z) == (4.0, 5.0, 6.0)
