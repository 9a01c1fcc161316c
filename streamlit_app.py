"""Main Streamlit UI for Viral Script Studio.

Three sequential views share one `Session`:
- Input: paste the original script and analyze it.
- Selection: review the analysis and pick (or type) a new topic.
- Result: read, copy or download the rewritten script.
"""

from __future__ import annotations

import html
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any

import streamlit as st
from dotenv import load_dotenv

# Ensure backend package is importable when running `streamlit run streamlit_app.py`.
ROOT = Path(__file__).resolve().parent
BACKEND_ROOT = ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
load_dotenv(ROOT / ".env", override=False)

SECRET_ENV_KEYS = (
    "GEMINI_API_KEY",
    "VSS_MODEL",
    "VSS_BASE_URL",
    "VSS_TEMPERATURE",
    "VSS_DEMO_MODE",
    "VSS_LOG_LEVEL",
)


def _hydrate_env_from_streamlit_secrets() -> None:
    """Load model config from Streamlit Secrets into env when not already set."""
    try:
        secrets = st.secrets.to_dict()
    except Exception:
        # No secrets.toml is a normal local setup.
        return

    gemini_block = secrets.get("gemini")
    if isinstance(gemini_block, dict):
        mapping = {
            "api_key": "GEMINI_API_KEY",
            "model": "VSS_MODEL",
            "base_url": "VSS_BASE_URL",
        }
        for secret_key, env_key in mapping.items():
            value = gemini_block.get(secret_key)
            if isinstance(value, str) and value.strip() and not os.getenv(env_key):
                os.environ[env_key] = value.strip()

    for key in SECRET_ENV_KEYS:
        value = secrets.get(key)
        if isinstance(value, str) and value.strip() and not os.getenv(key):
            os.environ[key] = value.strip()


_hydrate_env_from_streamlit_secrets()

from viral_script_studio.app import create_app  # noqa: E402
from viral_script_studio.session import Session, Step  # noqa: E402
from viral_script_studio.workflow import run_analysis, run_generation  # noqa: E402

RECOMMENDED_SCRIPT_CHARS = 200
STEP_LABELS = {
    Step.INPUT: "Step 1. 대본 입력",
    Step.SELECTION: "Step 2. 주제 선택",
    Step.RESULT: "Step 3. 완성",
}
KEY_SOURCE_LABELS = {
    "env": "환경 변수",
    "stored": "저장된 키",
    "user": "직접 입력",
    "none": "미설정",
}


@st.cache_resource
def _get_app() -> dict[str, Any]:
    app = create_app()
    logging.basicConfig(level=app["settings"].log_level)
    return app


def _char_count_caption(script: str) -> str:
    if not script:
        return f"최소 {RECOMMENDED_SCRIPT_CHARS}자 이상 권장"
    caption = f"{len(script)}자 입력됨"
    if len(script) < RECOMMENDED_SCRIPT_CHARS:
        caption += f" · 최소 {RECOMMENDED_SCRIPT_CHARS}자 이상 권장"
    return caption


def _export_filename(title: str) -> str:
    slug = re.sub(r"[^\w가-힣]+", "_", title).strip("_")
    return f"{slug[:60] or 'viral_script'}.md"


def _rerun() -> None:
    try:
        st.rerun()
    except AttributeError:
        st.experimental_rerun()


def _init_state() -> None:
    defaults = {
        "vss_session": Session(),
        "vss_script_input": "",
        "vss_custom_topic": "",
        "vss_api_key_input": "",
        "vss_key_error": False,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _session() -> Session:
    return st.session_state["vss_session"]


def _credentials(app: dict[str, Any]) -> Any:
    # One manager per visitor; the env/Secrets default is the only shared key.
    if "vss_credentials" not in st.session_state:
        st.session_state["vss_credentials"] = app["credentials_for"](st.session_state)
    return st.session_state["vss_credentials"]


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
        .stApp {
            background:
                radial-gradient(ellipse at top, rgba(79, 70, 229, 0.18), transparent 55%),
                #020617;
            color: #e2e8f0;
        }
        .vss-header {
            display: flex;
            align-items: center;
            justify-content: space-between;
            border-bottom: 1px solid #1e293b;
            padding-bottom: 0.8rem;
            margin-bottom: 1.4rem;
        }
        .vss-title { font-size: 1.35rem; font-weight: 800; color: #ffffff; }
        .vss-badge {
            font-size: 0.75rem;
            padding: 0.2rem 0.75rem;
            border-radius: 999px;
            color: #a5b4fc;
            background: rgba(99, 102, 241, 0.1);
            border: 1px solid rgba(99, 102, 241, 0.25);
        }
        .vss-badge.demo { color: #fcd34d; border-color: rgba(252, 211, 77, 0.35); }
        .vss-card {
            background: rgba(15, 23, 42, 0.6);
            border: 1px solid #1e293b;
            border-radius: 1rem;
            padding: 1.1rem 1.3rem;
            margin-bottom: 1rem;
        }
        .vss-kicker {
            font-size: 0.72rem;
            font-weight: 700;
            letter-spacing: 0.08em;
            text-transform: uppercase;
            color: #64748b;
            margin: 0 0 0.35rem 0;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _header(session: Session, demo_mode: bool) -> None:
    demo_badge = "<span class='vss-badge demo'>Demo Mode</span> " if demo_mode else ""
    st.markdown(
        f"""
        <div class="vss-header">
          <span class="vss-title">ViralScript AI</span>
          <span>{demo_badge}<span class="vss-badge">{html.escape(STEP_LABELS[session.step])}</span></span>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _save_api_key(credentials: Any) -> None:
    try:
        credentials.set(st.session_state["vss_api_key_input"])
    except ValueError:
        st.session_state["vss_key_error"] = True
        return
    st.session_state["vss_key_error"] = False
    st.session_state["vss_api_key_input"] = ""


def _sidebar_key_panel(credentials: Any, settings: Any) -> None:
    st.sidebar.markdown("## API 키 설정")
    if settings.demo_mode:
        st.sidebar.info("데모 모드입니다. 실제 AI 호출 없이 예시 결과가 생성됩니다.")

    masked = credentials.masked()
    source = KEY_SOURCE_LABELS.get(credentials.source, credentials.source)
    if masked:
        st.sidebar.caption(f"현재 키: `{masked}` ({source})")
    else:
        st.sidebar.warning("Gemini API 키가 설정되지 않았습니다.")

    st.sidebar.text_input("Gemini API 키", key="vss_api_key_input", type="password")
    cols = st.sidebar.columns(2)
    cols[0].button(
        "저장",
        key="vss_save_key",
        use_container_width=True,
        on_click=_save_api_key,
        args=(credentials,),
    )
    if cols[1].button("삭제", key="vss_clear_key", use_container_width=True, disabled=not masked):
        credentials.clear()
        _rerun()

    if st.session_state.get("vss_key_error"):
        st.sidebar.error("API 키를 입력해주세요.")

    if settings.credential_store == "file":
        storage_note = "키는 이 컴퓨터의 로컬 파일에 저장됩니다. "
    else:
        storage_note = "키는 현재 브라우저 세션에만 보관됩니다. "
    st.sidebar.caption(
        storage_note
        + "`GEMINI_API_KEY` 환경 변수나 Streamlit Secrets로도 설정할 수 있습니다."
    )


def _error_banner(session: Session) -> None:
    if not session.error_message:
        return
    cols = st.columns([8, 1])
    cols[0].error(session.error_message)
    cols[1].button("닫기", key="vss_dismiss_error", on_click=session.dismiss_error)


def _start_over() -> None:
    _session().reset()
    st.session_state["vss_script_input"] = ""
    st.session_state["vss_custom_topic"] = ""


def _input_view(session: Session, app: dict[str, Any], credentials: Any) -> None:
    st.title("떡상 영상 복제기")
    st.caption(
        "성공한 유튜브 영상의 대본을 붙여넣으세요. "
        "구조를 완벽하게 분석하여 새로운 대본으로 재탄생시킵니다."
    )

    st.text_area(
        "원본 떡상 영상 대본",
        key="vss_script_input",
        height=320,
        placeholder="영상 시작('안녕하세요')부터 끝('구독 좋아요')까지 전체 내용을 붙여넣어주세요...",
        disabled=session.is_analyzing,
    )
    script = st.session_state["vss_script_input"]
    st.caption(_char_count_caption(script))

    analyze = st.button(
        "구조 분석하고 주제 추천받기",
        type="primary",
        use_container_width=True,
        disabled=not script.strip() or session.is_analyzing,
    )
    if analyze:
        with st.spinner("대본 구조 분석 중... 영상 대본의 DNA를 추출하고 어울리는 주제를 찾고 있습니다."):
            run_analysis(session, app["ai_client"], credentials, script)
        _rerun()


def _analysis_report(session: Session) -> None:
    analysis = session.analysis
    points = "".join(f"<li>{html.escape(point)}</li>" for point in analysis.structural_points)
    st.markdown(
        f"""
        <div class="vss-card">
          <p class="vss-kicker">구조 분석</p>
          <ol>{points}</ol>
        </div>
        <div class="vss-card">
          <p class="vss-kicker">톤 앤 매너</p>
          <div>{html.escape(analysis.tone)}</div>
        </div>
        <div class="vss-card">
          <p class="vss-kicker">후킹 전략</p>
          <div>{html.escape(analysis.hook_strategy)}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def _generate(session: Session, app: dict[str, Any], credentials: Any, topic: str) -> None:
    with st.spinner(f"'{topic}' 주제로 새 대본을 작성하는 중..."):
        run_generation(session, app["ai_client"], credentials, topic)
    _rerun()


def _selection_view(session: Session, app: dict[str, Any], credentials: Any) -> None:
    nav = st.columns(2)
    nav[0].button(
        "← 대본 다시 입력하기",
        key="vss_back_input",
        use_container_width=True,
        on_click=session.back_to_input,
    )
    nav[1].button(
        "처음부터 다시하기",
        key="vss_start_over_selection",
        use_container_width=True,
        on_click=_start_over,
    )

    left, right = st.columns([5, 7])
    with left:
        st.subheader("Viral DNA 분석 결과")
        _analysis_report(session)

    with right:
        st.subheader("이 구조에 딱 맞는 추천 주제")
        chosen = None
        topic_cols = st.columns(2)
        for idx, topic in enumerate(session.analysis.suggested_topics):
            if topic_cols[idx % 2].button(
                f"OPTION {idx + 1}\n\n{topic}",
                key=f"vss_topic_{idx}",
                use_container_width=True,
                disabled=session.is_generating,
            ):
                chosen = topic

        st.markdown("또는 직접 입력하기")
        with st.form("vss_custom_topic_form", clear_on_submit=False):
            st.text_input(
                "원하는 다른 주제",
                key="vss_custom_topic",
                placeholder="원하는 다른 주제가 있다면 입력해주세요...",
            )
            submitted = st.form_submit_button(
                "이 주제로 대본 만들기",
                use_container_width=True,
                disabled=session.is_generating,
            )
        custom_topic = st.session_state["vss_custom_topic"].strip()
        if submitted and custom_topic:
            chosen = custom_topic

    if chosen:
        _generate(session, app, credentials, chosen)


def _result_view(session: Session) -> None:
    generated = session.generated
    cols = st.columns(2)
    cols[0].button(
        "다른 주제로 다시 만들기",
        key="vss_back_selection",
        use_container_width=True,
        on_click=session.back_to_selection,
    )
    cols[1].button("처음부터 다시하기", key="vss_start_over", use_container_width=True, on_click=_start_over)

    st.header(generated.title)
    st.markdown(generated.script)

    with st.expander("복사용 원문"):
        st.code(generated.as_markdown(), language="markdown")
    st.download_button(
        "대본 다운로드",
        data=generated.as_markdown(),
        file_name=_export_filename(generated.title),
        mime="text/markdown",
        use_container_width=True,
        key="vss_download",
    )


def main() -> None:
    st.set_page_config(
        page_title="ViralScript AI",
        page_icon="🪄",
        layout="wide",
    )

    _init_state()
    _inject_styles()

    app = _get_app()
    session = _session()
    credentials = _credentials(app)

    _sidebar_key_panel(credentials, app["settings"])
    _header(session, app["settings"].demo_mode)
    _error_banner(session)

    if session.step is Step.INPUT:
        _input_view(session, app, credentials)
    elif session.step is Step.SELECTION:
        _selection_view(session, app, credentials)
    else:
        _result_view(session)


if __name__ == "__main__":
    main()
