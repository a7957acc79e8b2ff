import pytest
from graphql import parse, print_ast

from persisted_query_extractor.engine import ExtractionEngine
from persisted_query_extractor.fragments import create_document_from_query
from persisted_query_extractor.manifest_builder import ManifestBuilder, SourceParseError
from persisted_query_extractor.query_collector import SourceCollector

QUERIES = """
query {
  author {
    firstName
    lastName
  }
}

query otherQuery {
  person {
    firstName
    lastName
  }
}
"""


def test_build_from_single_file(tmp_path):
    queries = tmp_path / "queries.graphql"
    queries.write_text(QUERIES)

    builder = ManifestBuilder()
    manifest = builder.build([queries])

    definitions = parse(QUERIES).definitions
    keys = [builder.engine.get_query_key(d) for d in definitions]
    assert list(manifest) == keys
    for key, definition in zip(keys, definitions):
        assert print_ast(manifest[key].transformed_query) == print_ast(
            create_document_from_query(definition)
        )


def test_build_from_directory_dedups_across_files(tmp_path):
    (tmp_path / "a.graphql").write_text("query first { name }\nquery shared { id }")
    (tmp_path / "b.graphql").write_text("query   shared {\n  id\n}\nquery last { name }")

    manifest = ManifestBuilder().build([tmp_path])
    assert [(e.operation_name, e.id) for e in manifest.values()] == [
        ("first", 1),
        ("shared", 2),
        ("last", 3),
    ]


def test_fragments_do_not_leak_between_files(tmp_path):
    (tmp_path / "a.graphql").write_text(
        "query a { author { ...details } }\nfragment details on Author { name }"
    )
    (tmp_path / "b.graphql").write_text("query b { author { ...details } }")

    manifest = ManifestBuilder().build([tmp_path])
    fragment_counts = {e.operation_name: e.fragment_count for e in manifest.values()}
    assert fragment_counts == {"a": 1, "b": 0}


def test_build_from_javascript(tmp_path):
    (tmp_path / "component.js").write_text(
        "const F = gql`fragment details on Author { name }`;\n"
        "const Q = gql`query authors { author { ...details } } ${F}`;\n"
    )
    builder = ManifestBuilder(collector=SourceCollector(extract_from_js=True))
    manifest = builder.build([tmp_path])

    (entry,) = manifest.values()
    assert entry.operation_name == "authors"
    assert entry.fragment_count == 1


def test_parse_error_reports_location(tmp_path):
    broken = tmp_path / "broken.graphql"
    broken.write_text("query {\n  author {\n")

    with pytest.raises(SourceParseError) as excinfo:
        ManifestBuilder().build([broken])
    assert str(broken) in str(excinfo.value)


def test_shared_engine_continues_numbering(tmp_path):
    queries = tmp_path / "queries.graphql"
    queries.write_text(QUERIES)

    engine = ExtractionEngine()
    engine.process_graphql_source("query earlier { name }")
    manifest = ManifestBuilder(engine).build([queries])
    assert [e.id for e in manifest.values()] == [2, 3]


def test_parse_error_in_later_javascript_literal_reports_file_line(tmp_path):
    lines = ["const A = gql`{ a }`;"]
    lines += ["// filler"] * 8
    lines += ["const B = gql`", "  { b( }", "`;"]
    component = tmp_path / "c.js"
    component.write_text("\n".join(lines) + "\n")

    builder = ManifestBuilder(collector=SourceCollector(extract_from_js=True))
    with pytest.raises(SourceParseError) as excinfo:
        builder.build([component])
    assert str(excinfo.value).startswith(f"{component}:11:8:")


def test_parse_error_in_graphql_file_reports_file_line(tmp_path):
    broken = tmp_path / "broken.graphql"
    broken.write_text("query a { name }\n\nquery b {\n  author(\n}\n")

    with pytest.raises(SourceParseError) as excinfo:
        ManifestBuilder().build([broken])
    assert str(excinfo.value).startswith(f"{broken}:5:1:")
