"""theme.py — shared page CSS (dark slate and violet palette)."""
import streamlit as st

_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

html, body, [class*="css"] {
    font-family: 'Inter', system-ui, sans-serif;
    background-color: #0B1220;
    color: #E6EAF2;
}
.stApp { background-color: #0B1220; }

.badge {
    display: inline-block;
    background: #6D5EF7;
    color: #E6EAF2;
    border-radius: 6px;
    padding: 0.15rem 0.6rem;
    font-size: 0.75rem;
    font-weight: 600;
    margin-left: 0.5rem;
}
.muted { color: #A7B0C0; font-size: 0.9rem; }
.timer { font-size: 1.3rem; font-weight: 600; color: #E6EAF2; }
.timer.low { color: #F87171; }
.score-good { color: #4ADE80; }
.score-fair { color: #FACC15; }
.score-poor { color: #F87171; }

div.stButton > button {
    border-radius: 8px;
    font-weight: 600;
    transition: background 0.2s;
}
div.stButton > button[kind="primary"] {
    background: #6D5EF7;
    color: #E6EAF2;
    border: none;
}
div.stButton > button[kind="primary"]:hover { background: #5a4dd6; }

div[data-testid="stTextInput"] input {
    background: #0B1220 !important;
    border: 1px solid #22304A !important;
    border-radius: 8px !important;
    color: #E6EAF2 !important;
}
div[data-testid="stTextInput"] label { color: #A7B0C0 !important; }

.stTabs [data-baseweb="tab"] { color: #A7B0C0; font-weight: 500; }
.stTabs [aria-selected="true"] {
    color: #6D5EF7 !important;
    border-bottom: 2px solid #6D5EF7 !important;
}
</style>
"""


def apply_theme() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)
