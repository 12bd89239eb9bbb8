from __future__ import annotations

import base64
import logging
from typing import List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from apps.api.analysis import (
    ImageDecodeError,
    analyze_image,
    analyze_images,
    analyze_keypoints,
    get_pose_model,
    is_supported_image,
)
from config import CONFIDENCE_THRESHOLD, MAX_UPLOAD_BYTES
from utils.report_pdf import build_posture_report_pdf

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Posture Analysis API",
    version="0.1.0",
    description="Keypoint-based posture metrics, skeleton overlays and reports.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class KeypointIn(BaseModel):
    x: float
    y: float
    score: float = Field(default=1.0, ge=0.0, le=1.0)
    name: Optional[str] = None


class KeypointsRequest(BaseModel):
    keypoints: List[Optional[KeypointIn]] = Field(max_length=17)
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    normalized: bool = False
    confidence_threshold: float = Field(default=CONFIDENCE_THRESHOLD, ge=0.0, le=1.0)


async def _read_upload(file: UploadFile) -> bytes:
    if not is_supported_image(file.filename):
        raise HTTPException(status_code=400, detail=f"지원하지 않는 이미지 형식입니다: {file.filename}")
    data = await file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"파일 크기가 너무 큽니다: {file.filename}")
    return data


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/analysis/keypoints")
def keypoints_analysis(payload: KeypointsRequest) -> dict:
    raw = [kp.model_dump() if kp is not None else None for kp in payload.keypoints]
    try:
        analysis = analyze_keypoints(
            raw,
            width=payload.width,
            height=payload.height,
            normalized=payload.normalized,
            confidence_threshold=payload.confidence_threshold,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return analysis.to_dict()


@app.post("/analysis/image")
async def image_analysis(file: UploadFile = File(...)) -> dict:
    data = await _read_upload(file)
    try:
        photo = analyze_image(get_pose_model(), data, file.filename)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    result = photo.to_dict()
    result["overlay_png"] = base64.b64encode(photo.overlay_png).decode("ascii") if photo.overlay_png else None
    return result


@app.post("/analysis/report")
async def report_analysis(files: List[UploadFile] = File(...)) -> Response:
    uploads = [(file.filename, await _read_upload(file)) for file in files]
    photos = analyze_images(get_pose_model(), uploads)

    logger.info(f"리포트 생성: 사진 {len(photos)}장")
    pdf = build_posture_report_pdf(photos)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="posture_report.pdf"'},
    )
