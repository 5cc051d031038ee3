"""Streamlit page for trying the objection handler in a browser."""

import streamlit as st

from config.logging_config import configure_logging
from config.settings import Settings
from errors import InvalidRequest
from orchestrator import ObjectionHandlerOrchestrator

st.set_page_config(page_title="Objection Handler", layout="wide")


@st.cache_resource
def get_orchestrator() -> ObjectionHandlerOrchestrator:
    # One orchestrator (and history) per Streamlit server process
    settings = Settings.from_env()
    configure_logging(settings.log_level, verbose=settings.verbose)
    return ObjectionHandlerOrchestrator(settings=settings)


st.title("🎯 Objection Handler")
st.caption("Paste what the prospect said and get a suggested reply")

conversation_input = st.text_area(
    "What did they say?",
    placeholder="e.g. This seems too expensive for what we get"
)

conversation_strategy = st.text_input(
    "Strategy",
    value="value-focused sales"
)

run = st.button("💬 Suggest Reply")

if run:
    orchestrator = get_orchestrator()
    try:
        with st.spinner("Analyzing, drafting and reviewing..."):
            result = orchestrator.process(conversation_input, conversation_strategy)
    except InvalidRequest as e:
        st.warning(str(e))
        st.stop()

    if not result.succeeded:
        st.error(f"{result.error}: {result.details}")
        st.info(result.fallback_response)
        st.stop()

    st.subheader("Suggested Reply")
    st.success(result.response)

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("**Analysis**")
        st.json(result.analysis.to_wire())

    with col2:
        st.markdown("**Quality**")
        st.metric("Overall", f"{result.quality.overall_score:g}/10")
        st.json(result.quality.to_wire())

    if result.metadata.fallbacks:
        st.caption(f"Default output used by: {', '.join(result.metadata.fallbacks)}")

history = get_orchestrator().get_recent_history()
if history:
    st.markdown("---")
    st.subheader("Recent Conversation")
    for item in reversed(history):
        st.markdown(f"**They said:** {item.input}")
        st.markdown(f"**Suggested:** {item.response}")
        st.caption(f"{item.timestamp:%H:%M:%S} · {item.session_id}")
