"""Interactive Streamlit inspector for dotenv files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import streamlit as st

from dotenv_engine.materializer import EnvMaterializer, MappingEnvironment
from dotenv_engine.parser import EnvFileParser, ParseResult
from dotenv_engine.report import diagnostics_frame, entries_frame

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_ENV_PATH = PROJECT_ROOT / "examples" / ".env"
DEFAULT_AMBIENT = "DOMAIN=ambient.com\nDEBUG=false\nUSER=streamlit\n"


def _default_source() -> str:
    if DEFAULT_ENV_PATH.exists():
        return DEFAULT_ENV_PATH.read_text(encoding="utf-8")
    return "DOMAIN=example.org\nROOT_URL=${DOMAIN}/app\n"


def _parse_ambient(text: str) -> ParseResult:
    # Same syntax as the file; ${NAME} here only sees earlier ambient lines.
    return EnvFileParser().parse(text)


def _render_mode(label: str, result: ParseResult, ambient: Dict[str, str], override: bool, show_values: bool) -> None:
    environment = MappingEnvironment(dict(ambient))
    outcome = EnvMaterializer().materialize(result, environment, override=override)
    st.subheader(label)
    st.metric(label="Keys written", value=outcome.count, delta=f"{len(outcome.kept)} kept")
    st.dataframe(entries_frame(result, outcome, show_values=show_values))


def main() -> None:
    st.set_page_config(page_title="Dotenv Inspector", layout="wide")
    st.title("Dotenv Inspector")
    st.caption("Paste a dotenv file and an ambient environment to preview default and override loading.")

    left, right = st.columns(2)
    source_text = left.text_area("Dotenv file", value=_default_source(), height=280)
    ambient_text = right.text_area("Ambient environment", value=DEFAULT_AMBIENT, height=280)
    show_values = st.checkbox("Show values", value=True)

    ambient_result = _parse_ambient(ambient_text)
    if ambient_result.diagnostics:
        right.warning(f"{len(ambient_result.diagnostics)} diagnostic(s) in the ambient environment")
        right.dataframe(diagnostics_frame(ambient_result))
    ambient = ambient_result.as_dict()
    result = EnvFileParser().parse(source_text, ambient.get)

    if result.diagnostics:
        st.warning(f"{len(result.diagnostics)} diagnostic(s) found")
        st.dataframe(diagnostics_frame(result))
    else:
        st.success(f"Parsed {len(result)} entries without diagnostics")

    default_col, override_col = st.columns(2)
    with default_col:
        _render_mode("Default (environment wins)", result, ambient, False, show_values)
    with override_col:
        _render_mode("Override (file wins)", result, ambient, True, show_values)


if __name__ == "__main__":
    main()
