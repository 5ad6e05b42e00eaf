#     app_survey_wordcloud.py
# RUN -
#
#     streamlit run app_survey_wordcloud.py
#
#
# survey free-text word cloud (dedup + weighted tagging + spiral layout)
# purpose: turn one open-ended survey question into a ranked, interactive word cloud
# input:
#   - csv export of a survey; pick the column that holds the free-text answers.
# pipeline:
#   - identical answers are collapsed and weighted by how many people gave them; boilerplate ("n/a", "none", ...) is dropped.
#   - very large answer sets are sampled down and re-weighted so the table still reflects the whole corpus.
#   - adjectives and (singularized) nouns are pulled out with the nltk tagger; the top 30 words are kept.
#   - words are sized on a log scale and packed on a spiral from the center, no overlaps.
# key options (sidebar):
#   - question label (picks the positive or negative palette), canvas size, random seed.
#   - performance: unique-response cap, number of words, csv encoding.
# interaction:
#   - click a word in the list to remove it from the cloud; click it again in the removed list to restore it.
# dependencies: python 3.10+, streamlit, pandas, matplotlib, wordcloud, pillow, numpy, nltk
# run: streamlit run this_file.py

import asyncio
import hashlib
import io
import random
from typing import List

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from survey_cloud.config import CloudConfig, configure_logging
from survey_cloud.controller import GENERATING_MESSAGE, NO_WORDS_MESSAGE, CloudController
from survey_cloud.labels import clean_question_label
from survey_cloud.render import build_cloud_figure
from survey_cloud.tagging import TaggerHandle

configure_logging()

DEFAULT_CLOUD_HEIGHT = round(350 * 1.10)


# ---------------------------
# utilities & setup
# ---------------------------

@st.cache_resource(show_spinner=False)
def setup_tagger() -> TaggerHandle:
    """
    Starts loading the nltk tagger in the background, once per server process.
    Pages render their placeholders until the handle reports ready.
    """
    return TaggerHandle.load_in_background()


@st.cache_data(show_spinner=False)
def read_survey_csv(file_bytes: bytes, encoding_choice: str = "auto") -> pd.DataFrame:
    enc = "latin-1" if encoding_choice == "latin-1" else "utf-8"
    return pd.read_csv(
        io.BytesIO(file_bytes),
        dtype=str,
        encoding=enc,
        encoding_errors="replace",
        engine="python",
        on_bad_lines="skip",
    )


def responses_fingerprint(responses: List[str]) -> str:
    digest = hashlib.sha1()
    for text in responses:
        digest.update(text.encode("utf-8", errors="replace"))
        digest.update(b"\x00")
    return digest.hexdigest()


def get_controller(key: str, label: str, config: CloudConfig, seed: int) -> CloudController:
    """One controller per (file, column, settings); kept across reruns so removed words survive."""
    controllers = st.session_state.setdefault("cloud_controllers", {})
    controller = controllers.get(key)
    if controller is None:
        controller = CloudController(setup_tagger(), label, config=config, rng=random.Random(seed))
        controllers[key] = controller
    controller.set_question_label(label)
    return controller


def drop_stale_controllers(active_key: str) -> None:
    controllers = st.session_state.get("cloud_controllers", {})
    fingerprints = st.session_state.get("cloud_fingerprints", {})
    for key in [k for k in controllers if k != active_key]:
        controllers.pop(key).close()
        fingerprints.pop(key, None)


# ---------------------------
# streamlit app
# ---------------------------

st.set_page_config(page_title="survey word cloud", layout="wide")
st.title("💬 survey free-text word cloud")

st.warning("""
**⚠️ Data Privacy Notice**

Do not upload files containing sensitive or personally identifiable information. Anonymize answers *before* uploading.
""")

uploaded_file = st.sidebar.file_uploader("upload survey export (csv)", type=["csv"])

st.sidebar.markdown("### 🎨 appearance")
bg_color = st.sidebar.color_picker("background color", value="#ffffff")
canvas_height = st.sidebar.slider("cloud height (px)", 200, 1000, DEFAULT_CLOUD_HEIGHT, 5)
canvas_width = st.sidebar.slider("cloud width (px)", 200, 1600, canvas_height, 5, help="defaults to the height, which gives a round cloud.")
random_seed = st.sidebar.number_input("random seed", 0, value=42, step=1, help="fixes sampling and color order.")

with st.sidebar.expander("⚙️ performance options", expanded=False):
    encoding_choice = st.selectbox("file encoding (CSV)", ["auto (utf-8)", "latin-1"])
    max_unique = st.number_input("max unique responses to tag", 100, 20_000, 2_000, 100, help="larger answer sets are sampled down and re-weighted.")
    top_words = st.slider("words in the cloud", 5, 60, 30)

if not uploaded_file:
    st.info("upload a csv to build a word cloud.")
    st.stop()

file_bytes = uploaded_file.getvalue()
try:
    survey_df = read_survey_csv(file_bytes, "latin-1" if encoding_choice == "latin-1" else "auto")
except (ValueError, pd.errors.ParserError) as e:
    st.error(f"could not read {uploaded_file.name}: {e}")
    st.stop()

columns = list(survey_df.columns)
if not columns:
    st.warning(f"no columns found in {uploaded_file.name}.")
    st.stop()

question = st.sidebar.selectbox("free-text question (column)", columns, 0)
label_input = st.sidebar.text_input("question label", value=question, help="labels mentioning dislike/worst/least/hate use the negative palette.")
display_label = clean_question_label(label_input) or question

raw_responses = survey_df[question].dropna().astype(str).tolist()
config = CloudConfig(max_unique_responses=int(max_unique), top_words=int(top_words))
controller_key = f"{uploaded_file.name}::{question}::{max_unique}::{top_words}::{random_seed}"
drop_stale_controllers(controller_key)
controller = get_controller(controller_key, label_input, config, int(random_seed))

fingerprint = responses_fingerprint(raw_responses)
fingerprints = st.session_state.setdefault("cloud_fingerprints", {})
if fingerprints.get(controller_key) != fingerprint:
    with st.spinner(GENERATING_MESSAGE):
        asyncio.run(controller.refresh(raw_responses))
    fingerprints[controller_key] = fingerprint

st.subheader(display_label)
st.caption(f"{len(raw_responses):,} responses")

message = controller.placeholder()
if message is not None and message != NO_WORDS_MESSAGE:
    st.info(message)
    st.stop()

col1, col2 = st.columns([3, 1])
with col1:
    image = controller.render(int(canvas_width), int(canvas_height))
    if image is None:
        st.info(NO_WORDS_MESSAGE)
    else:
        fig = build_cloud_figure(image, bg_color)
        st.pyplot(fig, use_container_width=False)
        plt.close(fig)
    if message is None:
        dropped = controller.layout(int(canvas_width), int(canvas_height)).dropped
        if dropped:
            st.caption("did not fit: " + ", ".join(dropped))

with col2:
    available, removed = controller.word_list()
    st.markdown("#### words")
    st.caption("click to remove a word from the cloud")
    for entry in available:
        st.button(f"{entry.word} · {entry.frequency}", key=f"word_{entry.word}", on_click=entry.toggle)
    if removed:
        st.markdown("#### removed")
        for entry in removed:
            st.button(f"~~{entry.word}~~ · {entry.frequency}", key=f"removed_{entry.word}", on_click=entry.toggle)

st.subheader(f"📊 word frequencies (top {len(controller.frequencies)})")
freq_df = pd.DataFrame(
    [(w.word, w.frequency, controller.state.is_removed(w.word)) for w in controller.frequencies],
    columns=["word", "frequency", "removed"],
)
st.dataframe(freq_df, use_container_width=True)

# ---------------------------
# help / guide
# ---------------------------
with st.expander("ℹ️ how to use this app", expanded=False):
    st.markdown("""
    - **Upload:** a CSV export of your survey; pick the column holding the open-ended answers.
    - **Label:** the question label decides the palette. Questions about dislikes or the worst/least liked things get the yellow palette.
    - **Words:** identical answers are counted once and weighted by how many people gave them; filler words ("good", "thing", "stuff") are ignored.
    - **Interact:** remove words that do not add anything and the cloud is re-packed; restore them from the removed list.
    - **Performance:** answer sets above the unique-response cap are sampled and re-weighted.
    """)
