from dotenv_engine.parser import DiagnosticKind, EnvFileParser, parse_env_text


def test_parse_preserves_source_order():
    result = parse_env_text("ZETA=1\nALPHA=2\nMID=3\n")

    assert result.keys() == ["ZETA", "ALPHA", "MID"]
    assert result.ok


def test_duplicate_key_last_assignment_wins_without_diagnostic():
    result = parse_env_text("A=1\nB=x\nA=2")

    assert result.as_dict() == {"A": "2", "B": "x"}
    assert result.keys() == ["A", "B"]
    assert result.entries[0].line == 3
    assert result.diagnostics == []


def test_comments_and_blank_lines_are_skipped():
    result = parse_env_text("# X=1\n\n   # indented comment\nY=2")

    assert result.as_dict() == {"Y": "2"}
    assert result.ok


def test_inline_hash_is_part_of_value():
    result = parse_env_text("COLOR=#ff0000\nNOTE=a # b")

    assert result.get("COLOR") == "#ff0000"
    assert result.get("NOTE") == "a # b"


def test_value_may_contain_equals_sign():
    result = parse_env_text("DSN=postgres://u:p@h/db?sslmode=require")

    assert result.get("DSN") == "postgres://u:p@h/db?sslmode=require"


def test_interpolation_prefers_earlier_entries_over_ambient():
    ambient = {"DOMAIN": "ambient.com"}
    result = parse_env_text("DOMAIN=example.org\nROOT_URL=${DOMAIN}/app", ambient.get)

    assert result.as_dict() == {"DOMAIN": "example.org", "ROOT_URL": "example.org/app"}


def test_interpolation_falls_back_to_ambient():
    ambient = {"HOME": "/home/app"}
    result = parse_env_text('CACHE="${HOME}/.cache"', ambient.get)

    assert result.get("CACHE") == "/home/app/.cache"
    assert result.ok


def test_unresolved_reference_becomes_empty_with_diagnostic():
    result = parse_env_text("X=${MISSING}", {}.get)

    assert result.as_dict() == {"X": ""}
    assert len(result.diagnostics) == 1
    diagnostic = result.diagnostics[0]
    assert diagnostic.kind is DiagnosticKind.UNRESOLVED_REFERENCE
    assert diagnostic.key == "X"
    assert diagnostic.line == 1


def test_forward_reference_is_unresolved():
    result = parse_env_text("URL=${HOST}/x\nHOST=localhost")

    assert result.get("URL") == "/x"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNRESOLVED_REFERENCE]


def test_circular_references_are_reported_as_unresolved():
    result = parse_env_text("A=${B}\nB=${A}")

    assert result.as_dict() == {"A": "", "B": ""}
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].line == 1


def test_single_quotes_disable_interpolation():
    result = parse_env_text("X='${DOMAIN}'", {"DOMAIN": "example.org"}.get)

    assert result.as_dict() == {"X": "${DOMAIN}"}
    assert result.ok


def test_double_quotes_keep_inner_whitespace_and_interpolate():
    result = parse_env_text('MSG="  hi ${NAME}  "', {"NAME": "bob"}.get)

    assert result.get("MSG") == "  hi bob  "


def test_malformed_line_is_reported_and_parsing_continues():
    result = parse_env_text("no_equals_sign\nA=1\n1BAD=2\n=3")

    assert result.as_dict() == {"A": "1"}
    assert [d.line for d in result.diagnostics] == [1, 3, 4]
    assert all(d.kind is DiagnosticKind.MALFORMED_LINE for d in result.diagnostics)


def test_single_malformed_line_yields_no_entries():
    result = parse_env_text("no_equals_sign")

    assert len(result) == 0
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].kind is DiagnosticKind.MALFORMED_LINE


def test_unterminated_quote_is_malformed():
    result = parse_env_text('X="abc\nY=ok')

    assert result.as_dict() == {"Y": "ok"}
    assert result.diagnostics[0].kind is DiagnosticKind.MALFORMED_LINE
    assert result.diagnostics[0].key == "X"


def test_export_prefix_and_spaces_around_equals():
    result = parse_env_text("export A=1\nB = two\n")

    assert result.as_dict() == {"A": "1", "B": "two"}


def test_trailing_whitespace_and_crlf_are_trimmed():
    result = parse_env_text("A=1   \r\nB=2\r\n")

    assert result.as_dict() == {"A": "1", "B": "2"}


def test_dollar_without_braces_is_literal():
    result = parse_env_text("PRICE=$5\nPATTERN=${not valid}")

    assert result.get("PRICE") == "$5"
    assert result.get("PATTERN") == "${not valid}"
    assert result.ok


def test_empty_input_is_valid():
    result = EnvFileParser().parse("")

    assert len(result) == 0
    assert result.ok


def test_parse_is_deterministic():
    text = "A=1\nB=${A}-${C}\nbroken\n"
    ambient = {"C": "c"}

    assert parse_env_text(text, ambient.get) == parse_env_text(text, ambient.get)


def test_quoted_prefix_followed_by_text_is_kept_unquoted():
    result = parse_env_text('MSG="hello" world\nB=1')

    assert result.as_dict() == {"MSG": '"hello" world', "B": "1"}
    assert result.ok


def test_text_after_quoted_prefix_still_interpolates():
    result = parse_env_text("NAME=bob\nMSG='hi' ${NAME}")

    assert result.get("MSG") == "'hi' bob"


def test_only_newline_ends_a_line():
    result = parse_env_text("A=x\x0cy\nB=p\u2028q\nC=3")

    assert result.as_dict() == {"A": "x\x0cy", "B": "p\u2028q", "C": "3"}
    assert [entry.line for entry in result.entries] == [1, 2, 3]
    assert result.ok


def test_leading_byte_order_mark_is_ignored():
    result = parse_env_text("\ufeffFIRST=1\nSECOND=2")

    assert result.as_dict() == {"FIRST": "1", "SECOND": "2"}
    assert result.ok


def test_each_unresolved_occurrence_is_reported():
    result = parse_env_text("X=${A}-${A}")

    assert result.get("X") == "-"
    assert len(result.diagnostics) == 2


def test_empty_quoted_values():
    result = parse_env_text("A=''\nB=\"\"")

    assert result.as_dict() == {"A": "", "B": ""}
    assert result.ok
