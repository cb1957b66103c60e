"""Content Pack Studio -- Streamlit UI.

Single page: get a transcript (captions, audio upload, or paste), generate a
content pack, browse it, and download it as JSON.
"""

from __future__ import annotations

import streamlit as st
import streamlit.components.v1 as components

from src.transcripts.sources import from_pasted_text
from src.ui.api_client import check_health, fetch_transcript, generate_pack, transcribe_upload
from src.ui.export import export_filename, export_json, transcript_stats, youtube_embed_url

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Content Pack Studio", layout="wide")

if "transcript" not in st.session_state:
    st.session_state["transcript"] = ""
if "pack" not in st.session_state:
    st.session_state["pack"] = None

# ---------------------------------------------------------------------------
# Sidebar -- API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Content Pack Studio")
    st.markdown("---")
    lang = st.text_input("Language", value="en", help="Caption / transcription language code")
    st.markdown("---")

    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

# ---------------------------------------------------------------------------
# Step 1: transcript
# ---------------------------------------------------------------------------
st.header("1. Transcript")

url = st.text_input("Video URL (optional)", placeholder="https://www.youtube.com/watch?v=...")

embed_url = youtube_embed_url(url)
if embed_url:
    components.iframe(embed_url, height=360)
elif url.strip():
    st.caption("Paste a valid YouTube link to see a preview.")

col_fetch, col_upload = st.columns(2)

with col_fetch:
    if st.button("Fetch captions", disabled=not url.strip() or not api_healthy):
        with st.spinner("Fetching captions..."):
            result = fetch_transcript(url.strip(), lang)
        if result:
            st.session_state["transcript"] = result.get("transcript", "")
            st.success(f"Fetched {result.get('count', 0)} caption lines.")

with col_upload:
    uploaded_file = st.file_uploader(
        "...or transcribe audio/video (max 25 MB)",
        type=["mp3", "m4a", "wav", "mp4", "webm", "ogg", "flac"],
    )
    if st.button("Transcribe", disabled=uploaded_file is None or not api_healthy):
        if uploaded_file is not None:
            with st.spinner("Transcribing... this can take a few minutes."):
                result = transcribe_upload(uploaded_file.getvalue(), uploaded_file.name, lang)
            if result:
                st.session_state["transcript"] = result.get("transcript", "")
                meta = result.get("meta", {})
                st.success(f"Transcribed with {meta.get('model', 'unknown model')}.")

pasted = st.text_area(
    "Transcript (paste or edit)",
    key="transcript",
    height=300,
)
chars, words = transcript_stats(pasted)
st.caption(f"{chars:,} characters · {words:,} words")

# ---------------------------------------------------------------------------
# Step 2: generate
# ---------------------------------------------------------------------------
st.header("2. Content pack")

if st.button("Generate", disabled=chars < 200 or not api_healthy):
    transcript = from_pasted_text(pasted).transcript
    with st.spinner("Generating chapters, clips and posts..."):
        st.session_state["pack"] = generate_pack(transcript, url.strip() or None) or None

pack = st.session_state["pack"]
if pack:
    if pack.get("title"):
        st.subheader(pack["title"])

    st.download_button(
        "Download JSON",
        data=export_json(pack),
        file_name=export_filename(pack.get("title")),
        mime="application/json",
    )

    tab_points, tab_chapters, tab_clips, tab_posts = st.tabs(
        ["Key points", "Chapters", "Clips", "Posts"]
    )

    with tab_points:
        for point in pack.get("key_points", []):
            st.write(f"- {point}")

    with tab_chapters:
        for chapter in pack.get("chapters", []):
            time = chapter.get("time") or "--:--"
            st.write(f"**{time}** {chapter.get('title', '')}")

    with tab_clips:
        for i, clip in enumerate(pack.get("clips", []), 1):
            span = f"{clip.get('start') or '?'} - {clip.get('end') or '?'}"
            with st.expander(f"Clip {i} ({span}): {clip.get('hook', '')}"):
                st.write(clip.get("caption", ""))
                st.caption(f"Why: {clip.get('why', '')}")

    with tab_posts:
        posts = pack.get("posts", {})
        st.subheader("LinkedIn")
        for i, post in enumerate(posts.get("linkedin", []), 1):
            st.text_area(
                f"LinkedIn post {i}", value=post, height=200, key=f"linkedin_{i}",
                label_visibility="collapsed",
            )
        st.subheader("X")
        for post in posts.get("x", []):
            st.code(post, language=None)
