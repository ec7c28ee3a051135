import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from pbxclean.core.models import ResolvePolicy
from pbxclean.normalizing.pipeline import NormalizationPipeline, split_lines
from pbx_samples import as_text, child_member, document, file_member, settings_block, version_line


def conflicted_project():
    return document(
        ["\t\tPHASE /* Sources */ = {", "\t\t\tfiles = ("],
        [file_member("ViewController.m", 3), file_member("AppDelegate.m", 1), file_member("ViewController.m", 3)],
        ["\t\t\t);", "\t\t};"],
        ["\t\tGROUP /* App */ = {", "\t\t\tchildren = ("],
        [child_member("main.m", 10), child_member("Resources", 11), child_member("Podfile", 12)],
        ["\t\t\t);", "\t\t};"],
        ["\t\tDEBUG /* Debug */ = {"], settings_block("3", "12"), ["\t\t};"],
        ["\t\tRELEASE /* Release */ = {"], settings_block("7"), ["\t\t};"],
    )


def test_whole_document_highest():
    context = NormalizationPipeline().run(as_text(conflicted_project()))

    assert [t.value for t in context.tokens] == ["3", "12", "7"]
    assert context.resolved_version == "12"
    out = context.output_lines
    assert out.count(version_line("12", "\t\t\t\t")) == 1
    assert version_line("3") not in out and version_line("7") not in out
    assert out.count(file_member("ViewController.m", 3)) == 1
    assert out.index(child_member("Resources", 11)) < out.index(child_member("main.m", 10))
    assert context.stats["duplicates_removed"] == 1
    assert context.stats["version_lines_dropped"] == 2


def test_whole_document_lowest():
    context = NormalizationPipeline().run(as_text(conflicted_project()), ResolvePolicy.LOWEST)
    assert context.resolved_version == "3"
    assert version_line("3") in context.output_lines
    assert version_line("12") not in context.output_lines


def test_normalized_output_is_stable():
    """IDEMPOTENCY TEST: a second run over normalized output changes nothing."""
    pipeline = NormalizationPipeline()
    first = pipeline.run(as_text(conflicted_project()))
    second = pipeline.run(first.normalized_text)
    assert second.normalized_text == first.normalized_text
    assert second.changed is False


def test_forced_version_skips_resolution():
    context = NormalizationPipeline().run(as_text(settings_block("3", "12")), resolved_version="3")
    assert context.resolved_version == "3"
    assert version_line("12") not in context.output_lines


def test_missing_final_newline_is_added():
    context = NormalizationPipeline().run("{\n}")
    assert context.normalized_text == "{\n}\n"
    assert context.changed is True


def test_empty_input():
    context = NormalizationPipeline().run("")
    assert context.normalized_text == ""
    assert context.resolved_version is None


def test_split_lines():
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("a\r\nb\r\n") == ["a\r", "b\r"]
