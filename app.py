"""
doi2bib - BibTeX Lookup
A Streamlit web application that turns a DOI (or any text containing one)
into its BibTeX record, a readable summary and an abstract.

Run with:  streamlit run app.py
"""

# Standard library imports
import html

# Third-party imports
import streamlit as st
import streamlit.components.v1 as components  # For the copy button

from doi2bib import config, fetchers
from doi2bib.browser_store import LocalStorageStore
from doi2bib.clipboard import COMPONENT_HEIGHT, copy_button_html
from doi2bib.controller import FetchController
from doi2bib.pipeline import LookupResult, lookup_doi
from doi2bib.theme import ThemeManager

config.configure_logging()

# ═══════════════════════════════════════════════════════════
# PAGE CONFIG & SESSION STATE
# ═══════════════════════════════════════════════════════════

st.set_page_config(
    page_title="doi2bib",
    page_icon="📚",
    layout="centered",
)


# Only the BibTeX record is memoised (an hour per DOI; failures are not
# cached). Abstract sources are asked again on every lookup.
@st.cache_data(show_spinner=False, ttl=3600)
def cached_bibtex(doi: str) -> str:
    return fetchers.fetch_bibtex(doi)


def cached_lookup(doi: str) -> LookupResult:
    return lookup_doi(doi, bibtex_fetcher=cached_bibtex)


def _system_prefers_dark() -> bool:
    """Color scheme reported by the browser, via Streamlit's context."""
    theme = getattr(st.context, "theme", None)
    return getattr(theme, "type", None) == "dark"


# Session state that persists across reruns:
# - controller: fetch/cooldown state for the form
# - theme_store: this browser's localStorage
# - theme: light/dark manager backed by theme_store
# - pending_doi: DOI submitted on the previous run, fetched at the end of this one
if "controller" not in st.session_state:
    st.session_state.controller = FetchController(lookup=cached_lookup)
if "theme_store" not in st.session_state:
    st.session_state.theme_store = LocalStorageStore()
if "theme" not in st.session_state:
    st.session_state.theme = ThemeManager(st.session_state.theme_store, _system_prefers_dark)
    st.session_state.theme.init()
if "pending_doi" not in st.session_state:
    st.session_state.pending_doi = None

controller: FetchController = st.session_state.controller
theme_store: LocalStorageStore = st.session_state.theme_store
theme: ThemeManager = st.session_state.theme

# The stored preference arrives from the browser a run or two after the
# page opens; until then (and whenever none is stored) follow the browser scheme
theme_store.load()
theme.sync()

# ═══════════════════════════════════════════════════════════
# THEME
# ═══════════════════════════════════════════════════════════

THEME_COLORS = {
    "light": {"bg": "#ffffff", "fg": "#1a1a2e", "panel": "#f0f2f6", "border": "#d1d5db"},
    "dark": {"bg": "#0e1117", "fg": "#e8e8ed", "panel": "#262730", "border": "#4a4b57"},
}


def _apply_theme_css(name: str):
    c = THEME_COLORS[name]
    st.markdown(
        f"""
        <style>
            .stApp {{ background-color: {c['bg']}; color: {c['fg']}; }}
            .stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3 {{ color: {c['fg']}; }}
            .stApp textarea, .stApp input {{
                background-color: {c['panel']};
                color: {c['fg']};
                border-color: {c['border']};
            }}
            .article-info {{
                background-color: {c['panel']};
                border: 1px solid {c['border']};
                border-radius: 8px;
                padding: 12px 14px;
            }}
        </style>
        """,
        unsafe_allow_html=True,
    )


_apply_theme_css(theme.theme)

# ═══════════════════════════════════════════════════════════
# CALLBACKS
# ═══════════════════════════════════════════════════════════

def _on_submit():
    """Runs when the form is submitted, by the button or by Enter in the input."""
    doi = controller.submit(st.session_state.get("doi_input", ""))
    st.session_state.pending_doi = doi
    # submitted inside the form fragment, which reruns on its own
    st.session_state.rerun_app = True


def _on_toggle_theme():
    theme.toggle()

# ═══════════════════════════════════════════════════════════
# HEADER
# ═══════════════════════════════════════════════════════════

col_title, col_theme = st.columns([6, 1])
with col_title:
    st.title("📚 doi2bib")
    st.caption("Paste a DOI, or any text containing one, to get its BibTeX record and abstract.")
with col_theme:
    st.button(
        theme.icon,
        key="theme_toggle",
        on_click=_on_toggle_theme,
        help="Switch to light mode" if theme.is_dark else "Switch to dark mode",
    )

# Writes queued by the toggle callback go out to localStorage here
theme_store.flush()

# ═══════════════════════════════════════════════════════════
# LOOKUP FORM
# The form lives in a fragment that re-runs every second, which is what
# makes the "Wait Ns" countdown tick.
# ═══════════════════════════════════════════════════════════

@st.fragment(run_every=1)
def _render_form():
    with st.form("lookup_form", border=False):
        st.text_input(
            "DOI or text containing a DOI",
            placeholder="e.g. 10.1038/nature12373  or  https://doi.org/10.1126/science.169.3946.635",
            key="doi_input",
        )
        st.form_submit_button(
            controller.button_label,
            type="primary",
            on_click=_on_submit,
            disabled=controller.button_disabled,
            use_container_width=True,
        )

    # A submit inside the fragment needs a full run to fetch and render results
    if st.session_state.pop("rerun_app", False):
        st.rerun(scope="app")


_render_form()

# ═══════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════

if controller.error:
    st.error(controller.error)

st.text_area("BibTeX", value=controller.bibtex, height=220, disabled=True)
components.html(copy_button_html(controller.bibtex, dark=theme.is_dark), height=COMPONENT_HEIGHT)

if controller.info_visible:
    summary = controller.summary
    rows = []
    for label, value in [("Title", summary.title), ("Authors", summary.authors),
                         ("Journal", summary.journal), ("Date", summary.date)]:
        if value:
            rows.append(f"<p><strong>{label}:</strong> {html.escape(value, quote=False)}</p>")
    rows.append(f"<p><strong>Abstract:</strong> {html.escape(controller.abstract_text, quote=False)}</p>")
    st.markdown(f'<div class="article-info">{"".join(rows)}</div>', unsafe_allow_html=True)

# ═══════════════════════════════════════════════════════════
# FETCH
# Runs after the page has rendered with the "Fetching..." label.
# ═══════════════════════════════════════════════════════════

if st.session_state.pending_doi:
    doi = st.session_state.pending_doi
    st.session_state.pending_doi = None
    with st.spinner("Fetching BibTeX and abstract..."):
        controller.complete(doi)
    st.rerun()
