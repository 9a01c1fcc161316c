"""Pure helpers from the Streamlit page."""

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from streamlit_app import (  # noqa: E402
    STEP_LABELS,
    _char_count_caption,
    _export_filename,
)
from viral_script_studio.session import Step  # noqa: E402


def test_char_count_caption():
    assert _char_count_caption("") == "최소 200자 이상 권장"
    assert _char_count_caption("가" * 50) == "50자 입력됨 · 최소 200자 이상 권장"
    assert _char_count_caption("가" * 250) == "250자 입력됨"


def test_export_filename_is_safe():
    assert _export_filename("고양이 키우기, 이것만 알면 끝!") == "고양이_키우기_이것만_알면_끝.md"
    assert _export_filename("???") == "viral_script.md"


def test_every_step_has_a_badge():
    assert set(STEP_LABELS) == set(Step)
