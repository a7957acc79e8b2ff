from graphql import parse, print_ast

from persisted_query_extractor.fragments import (
    build_fragment_index,
    create_document_from_query,
    get_operation_definitions,
    resolve_fragment_names,
    trim_document,
)


def _trim(document):
    operation = document.definitions[0]
    names = resolve_fragment_names(operation, build_fragment_index(document))
    return trim_document(document, operation, names)


def test_fragment_index_collects_fragments_by_name():
    document = parse("""
        query { author { ...authorDetails } }
        fragment authorDetails on Author { firstName }
        fragment otherDetails on Author { lastName }
    """)
    index = build_fragment_index(document)
    assert list(index) == ["authorDetails", "otherDetails"]
    assert index["authorDetails"] is document.definitions[1]


def test_fragment_index_first_definition_wins():
    document = parse("""
        fragment details on Author { firstName }
        fragment details on Author { lastName }
    """)
    index = build_fragment_index(document)
    assert index["details"] is document.definitions[0]


def test_fragment_index_empty_document_without_fragments():
    assert build_fragment_index(parse("{ author { name } }")) == {}


def test_resolve_nested_fragments_in_spread_order():
    document = parse("""
        query {
          author {
            ...second
            ...first
          }
        }
        fragment first on Author { firstName }
        fragment second on Author { lastName ...third }
        fragment third on Author { age }
    """)
    names = resolve_fragment_names(document.definitions[0], build_fragment_index(document))
    assert names == ["second", "third", "first"]


def test_resolve_spreads_inside_inline_fragments():
    document = parse("""
        query {
          node {
            ... on Author { ...authorDetails }
          }
        }
        fragment authorDetails on Author { firstName }
    """)
    names = resolve_fragment_names(document.definitions[0], build_fragment_index(document))
    assert names == ["authorDetails"]


def test_resolve_tolerates_cycles():
    document = parse("""
        query { author { ...a } }
        fragment a on Author { firstName ...b }
        fragment b on Author { lastName ...a }
    """)
    names = resolve_fragment_names(document.definitions[0], build_fragment_index(document))
    assert names == ["a", "b"]


def test_resolve_skips_missing_fragments():
    document = parse("""
        query { author { ...missing ...present } }
        fragment present on Author { firstName ...alsoMissing }
    """)
    names = resolve_fragment_names(document.definitions[0], build_fragment_index(document))
    assert names == ["present"]


def test_trim_no_fragment_query():
    document = parse("""
        query {
          author {
            firstName
            lastName
          }
        }
        fragment uselessFragment on Author {
          firstName
          lastName
        }
    """)
    expected = parse("""
        query {
          author {
            firstName
            lastName
          }
        }
    """)
    assert print_ast(_trim(document)) == print_ast(expected)


def test_trim_single_fragment_query():
    document = parse("""
        query {
          author {
            ...authorDetails
          }
        }
        fragment authorDetails on Author {
          firstName
          lastName
        }
    """)
    assert print_ast(_trim(document)) == print_ast(document)


def test_trim_nested_fragment_query():
    document = parse("""
        query {
          author {
            ...authorDetails
          }
        }
        fragment authorDetails on Author {
          firstName
          ...otherAuthorDetails
        }
        fragment otherAuthorDetails on Author {
          lastName
        }
        fragment uselessFragment on Author {
          garbageFields
        }
    """)
    minimal = parse("""
        query {
          author {
            ...authorDetails
          }
        }
        fragment authorDetails on Author {
          firstName
          ...otherAuthorDetails
        }
        fragment otherAuthorDetails on Author {
          lastName
        }
    """)
    assert print_ast(_trim(document)) == print_ast(minimal)


def test_trim_keeps_source_order_of_fragments():
    document = parse("""
        fragment first on Author { firstName }
        query { author { ...second ...first } }
        fragment second on Author { lastName }
    """)
    operation = document.definitions[1]
    names = resolve_fragment_names(operation, build_fragment_index(document))
    assert names == ["second", "first"]

    trimmed = trim_document(document, operation, names)
    assert trimmed.definitions[0] is operation
    assert [d.name.value for d in trimmed.definitions[1:]] == ["first", "second"]


def test_trim_emits_one_copy_of_duplicate_fragment():
    document = parse("""
        query { author { ...details } }
        fragment details on Author { firstName }
        fragment details on Author { lastName }
    """)
    trimmed = _trim(document)
    assert len(trimmed.definitions) == 2
    assert trimmed.definitions[1] is document.definitions[1]


def test_create_document_from_query():
    document = parse("query author { name } query person { name }")
    single = create_document_from_query(document.definitions[1])
    assert print_ast(single) == print_ast(parse("query person { name }"))


def test_get_operation_definitions_filters_by_type():
    document = parse("""
        query a { name }
        mutation b { doThing }
        fragment f on Author { name }
        subscription c { updates }
    """)
    all_names = [op.name.value for op in get_operation_definitions(document)]
    assert all_names == ["a", "b", "c"]
    queries = get_operation_definitions(document, ["query"])
    assert [op.name.value for op in queries] == ["a"]
