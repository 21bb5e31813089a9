import streamlit as st


def apply_styling():
    """Apply global CSS styling."""
    css = """
    <style>
    div[data-testid="stDataFrame"] div[data-testid="stTable"] { font-size: 0.8rem; }

    /* Active tab highlight */
    button[data-baseweb="tab"][aria-selected="true"] {
        background-color: #4f9bd9 !important;
        color: white !important;
        border-radius: 4px;
        font-weight: bold;
    }

    .stDeployButton { display: none !important; }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
