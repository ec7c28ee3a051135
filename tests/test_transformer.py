import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pbxclean.core.errors import MalformedEntryError
from pbxclean.core.models import SectionKind
from pbxclean.normalizing.transformer import StreamTransformer, TransformState
from pbx_samples import child_member, document, file_member, settings_block, version_line

PHASE_HEADER = ["\t\t13B07F871A680F5B00A75B9A /* Sources */ = {", "\t\t\tisa = PBXSourcesBuildPhase;"]
PHASE_FOOTER = ["\t\t\trunOnlyForDeploymentPostprocessing = 0;", "\t\t};"]


def run(lines, version=None):
    transformer = StreamTransformer()
    return list(transformer.transform(lines, version)), transformer


def test_files_section_is_sorted_and_deduplicated():
    b = file_member("b.m", 2)
    a = file_member("a.m", 1)
    lines = document(PHASE_HEADER, ["\t\t\tfiles = (", b, a, b, "\t\t\t);"], PHASE_FOOTER)

    out, transformer = run(lines)

    start = out.index("\t\t\tfiles = (")
    assert out[start + 1:start + 4] == [a, b, "\t\t\t);"]
    assert len(out) == len(lines) - 1
    assert transformer.stats.duplicates_removed == 1
    assert transformer.stats.sections[SectionKind.FILES.value] == 1


def test_lines_outside_sections_pass_through_unchanged():
    """PASS-THROUGH TEST: everything but section interiors is emitted verbatim and in order."""
    section = ["\t\t\tchildren = (", child_member("b.swift"), child_member("A"), "\t\t\t);"]
    lines = document(["\t\tGROUP /* Group */ = {", "\t\t\tisa = PBXGroup;"], section, ["\t\t\tsourceTree = \"<group>\";", "\t\t};"])

    out, _ = run(lines)

    interior = set(section[1:3])
    assert [l for l in out if l not in interior] == [l for l in lines if l not in interior]
    assert out[out.index(section[0]) + 1] == section[2]


def test_closer_trailing_whitespace_is_preserved():
    closer = "\t\t\t);   "
    out, _ = run(["\t\t\tfiles = (", file_member("z.m"), file_member("y.m"), closer, "tail"])
    assert out[-2:] == [closer, "tail"]


def test_deeper_closer_does_not_end_section():
    lines = [
        "\tchildren = (",
        child_member("b.m"),
        "\t\t);",
    ]
    with pytest.raises(MalformedEntryError):
        run(lines + ["\t);"])


def test_malformed_member_aborts_transform():
    lines = ["\t\t\tfiles = (", file_member("a.m"), "<<<<<<< HEAD", "\t\t\t);"]
    with pytest.raises(MalformedEntryError) as exc:
        run(lines)
    assert exc.value.line == "<<<<<<< HEAD"


def test_highest_version_survives_in_place():
    block = settings_block("3", "12", "7")
    out, transformer = run(block, "12")

    assert out == [block[0], block[1], version_line("12"), block[5], block[6]]
    assert transformer.stats.version_lines_dropped == 2


def test_lowest_version_survives():
    block = settings_block("3", "12", "7")
    out, _ = run(block, "3")
    assert version_line("3") in out
    assert version_line("12") not in out and version_line("7") not in out


def test_repeated_resolved_version_is_kept_once():
    out, _ = run(settings_block("12", "12"), "12")
    assert out.count(version_line("12")) == 1


def test_without_resolved_version_every_version_line_passes():
    block = settings_block("3", "12", "3")
    out, transformer = run(block, None)
    assert out == block
    assert transformer.stats.version_lines_dropped == 0


def test_block_without_versions_is_unchanged():
    block = settings_block()
    out, _ = run(block, "12")
    assert out == block


def test_block_lacking_resolved_version_loses_its_version_line():
    """The only declaration (5) differs from the resolved one (12) and is dropped."""
    block = settings_block("5")
    out, _ = run(block, "12")
    assert version_line("5") not in out
    assert len(out) == len(block) - 1


def test_version_filter_resets_per_block():
    lines = settings_block("12", "3") + settings_block("12")
    out, _ = run(lines, "12")
    assert out.count(version_line("12")) == 2


def test_version_lines_outside_settings_are_untouched():
    lines = ["CURRENT_PROJECT_VERSION = 1;"] + settings_block("1", "2")
    out, _ = run(lines, "2")
    assert out[0] == "CURRENT_PROJECT_VERSION = 1;"
    assert version_line("1") not in out


def test_nested_closer_inside_settings_does_not_end_block():
    lines = [
        "\t\t\tbuildSettings = {",
        "\t\t\t\tINFOPLIST_KEY = {",
        "\t\t\t\t};",
        version_line("2"),
        version_line("9"),
        "\t\t\t};",
    ]
    out, transformer = run(lines, "9")
    assert version_line("2") not in out
    assert transformer.state is TransformState.SCANNING


def test_settings_closer_returns_to_scanning():
    lines = settings_block("1") + ["\t\t\tfiles = (", file_member("b.m", 2), file_member("a.m", 1), "\t\t\t);"]
    out, _ = run(lines, "1")
    assert out[-3:] == [file_member("a.m", 1), file_member("b.m", 2), "\t\t\t);"]


def test_unterminated_list_is_flushed_sorted():
    out, transformer = run(["\tfiles = (", file_member("b.m", 2), file_member("a.m", 1)])
    assert out == ["\tfiles = (", file_member("a.m", 1), file_member("b.m", 2)]
    assert transformer.stats.unterminated_sections == 1


def test_opener_match_priority_and_capture():
    transformer = StreamTransformer()
    frame = transformer.match_opener("\t\t\tfiles = (  ", 4)
    assert frame.kind is SectionKind.FILES
    assert frame.closer == "\t\t\t);"
    assert transformer.match_opener("\t\tbuildSettings = {").closer == "\t\t};"
    assert transformer.match_opener("\t\tfiles = ( /* x */") is None
