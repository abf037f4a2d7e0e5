import streamlit as st

from mind_mirror.analysis_streamlit.gateway_client import request_analysis

MAX_CHARS = 10000


st.set_page_config(
    page_title="MindMirror AI",
    page_icon="🪞",
    layout="centered",
)

st.title("MindMirror AI")
st.caption("This analysis is based on the text only and is not a psychological assessment or diagnosis.")

text = st.text_area("Your text", height=220, max_chars=MAX_CHARS)
st.caption(f"{len(text):,} / {MAX_CHARS:,} characters")

if st.button("Analyze", type="primary", disabled=not text.strip()):
    with st.spinner("Analyzing..."):
        ok, body = request_analysis(text.strip())

    if not ok:
        st.error(body.get("error") or "Failed to analyze text")
    else:
        analysis = body["analysis"]
        st.subheader(f"Sentiment: {analysis.get('sentiment', 'neutral')}")
        themes = analysis.get("themes") or []
        st.markdown(" ".join(f"`{theme}`" for theme in themes) if themes else "_No specific themes identified_")
        st.markdown(f"**Tone:** {analysis.get('tone') or 'Not specified'}")
        st.markdown(f"**Summary:** {analysis.get('summary') or 'No summary available'}")
