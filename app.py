"""
자세 분석 사진 업로드 앱
사진 업로드 → YOLO pose 키포인트 추출 → 자세 지표/등급 → 오버레이 + 리포트 다운로드
"""
import cv2
import pandas as pd
import streamlit as st

from apps.api.analysis import analyze_images, get_pose_model
from config import CONFIDENCE_THRESHOLD, SUPPORTED_IMAGE_EXTENSIONS
from posture_modules import metric_rows
from utils.report_pdf import build_posture_report_pdf
from utils.visualization import decode_image, draw_report_banner, encode_png

# ── 페이지 설정 ──────────────────────────────────────────────
st.set_page_config(page_title="자세 분석", layout="wide")
st.title("자세 분석")

# ── 사이드바 ──────────────────────────────────────────────────
with st.sidebar:
    st.header("설정")
    threshold = st.slider("키포인트 신뢰도 임계값", min_value=0.1, max_value=0.9,
                          value=float(CONFIDENCE_THRESHOLD), step=0.05)
    st.caption("모델: YOLO pose (COCO 17 키포인트)")


# ── YOLO 모델 캐싱 로드 ──────────────────────────────────────
@st.cache_resource
def load_model():
    return get_pose_model()


# ── 1. 사진 업로드 ────────────────────────────────────────────
st.header("1. 사진 업로드")
uploaded_files = st.file_uploader(
    "분석할 사진을 업로드하세요 (여러 장 가능)",
    type=sorted(ext.lstrip(".") for ext in SUPPORTED_IMAGE_EXTENSIONS),
    accept_multiple_files=True,
)

if not uploaded_files:
    st.stop()

# ── 2. 분석 ───────────────────────────────────────────────────
with st.spinner("자세 분석 중..."):
    photos = analyze_images(
        load_model(),
        [(f.name, f.getvalue()) for f in uploaded_files],
        confidence_threshold=threshold,
    )

st.header("2. 분석 결과")
for i, photo in enumerate(photos):
    st.subheader(photo.name)
    if photo.failed:
        st.error(photo.error)
        continue
    analysis = photo.analysis
    col_img, col_metrics = st.columns([3, 2])

    with col_img:
        overlay = decode_image(photo.overlay_png)
        st.image(cv2.cvtColor(overlay, cv2.COLOR_BGR2RGB), use_container_width=True)

    with col_metrics:
        if not analysis.pose_found:
            st.warning("사람이 검출되지 않았습니다.")
            continue
        st.metric("자세 등급", analysis.rating.value)
        st.dataframe(
            pd.DataFrame(metric_rows(analysis.metrics), columns=["지표", "값", "단위"]),
            hide_index=True,
        )
        capture = draw_report_banner(overlay, analysis.lines)
        st.download_button(
            "캡처 이미지 다운로드",
            data=encode_png(capture),
            file_name=f"{photo.name.rsplit('.', 1)[0]}_posture.png",
            mime="image/png",
            key=f"png_{i}_{photo.name}",
        )

# ── 3. 리포트 ─────────────────────────────────────────────────
st.header("3. 리포트")
st.download_button(
    "PDF 리포트 다운로드",
    data=build_posture_report_pdf(photos),
    file_name="posture_report.pdf",
    mime="application/pdf",
)
