"""
API routes for the LSB codec service
"""

import logging
import traceback
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import JSONResponse

from lsb_lab.utility.constants_manager import ConstantsManager
from ..core.errors import CodecError
from ..core.service import LsbCodecService, safe_output_name
from ..models.codec_models import DEFAULT_TEXT_FILENAME, StegoLimits
from ..utils.image_utils import load_image_from_input
from .responses import StegoAPIResult


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lsb", tags=["lsb"])

constants = ConstantsManager()


def get_codec_service() -> LsbCodecService:
    return LsbCodecService(
        StegoLimits(
            max_cover_pixels=constants.get_max_cover_pixels(),
            max_payload_bytes=constants.get_max_payload_bytes(),
        )
    )


class CodecStats:
    def __init__(self):
        self.encoded_count = 0
        self.decoded_count = 0
        self.total_bytes_processed = 0


stats = CodecStats()


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses

    Args:
        status_code: HTTP status code
        message: Response message
        path: Optional file path
        details: Optional additional details

    Returns:
        JSONResponse with consistent format
    """
    return JSONResponse(
        status_code=status_code,
        content=StegoAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).model_dump()
    )


def error_response(exc: Exception, operation: str) -> JSONResponse:
    if isinstance(exc, CodecError):
        logger.warning(f"{type(exc).__name__} in {operation}: {exc}")
        return send_response(400, str(exc), details={"error": type(exc).__name__, **exc.details})
    if isinstance(exc, ValueError):
        logger.warning(f"ValueError in {operation}: {exc}")
        return send_response(400, str(exc))
    logger.error(f"Unexpected error in {operation}: {exc}\n{traceback.format_exc()}")
    return send_response(500, str(exc))


def _output_path(output_filename: Optional[str], prefix: str) -> Path:
    name = safe_output_name(output_filename) if output_filename else f"{prefix}_{uuid.uuid4().hex}.png"
    return Path(constants.get_output_dir()) / name


@router.post("/capacity", response_model=StegoAPIResult)
async def check_capacity(
    file: UploadFile = File(...),
    filename: str = Form(""),
):
    """
    Check how many payload bytes an image can carry

    Args:
        file: The image file to check
        filename: Filename that would be stored with the payload

    Returns:
        StegoAPIResult with capacity information
    """
    try:
        img = load_image_from_input(file=BytesIO(await file.read()))
        result = get_codec_service().capacity(img, filename)
        return send_response(
            200,
            f"Image can hold {result.max_payload_bytes} payload bytes",
            None,
            result.model_dump()
        )
    except Exception as e:
        return error_response(e, "capacity")


@router.post("/encode-text", response_model=StegoAPIResult)
async def encode_text(
    file: UploadFile = File(...),
    text: str = Form(...),
    filename: str = Form(DEFAULT_TEXT_FILENAME),
    output_filename: Optional[str] = Form(None),
):
    """
    Hide text in an image

    Args:
        file: Cover image
        text: Text to hide
        filename: Filename stored with the text
        output_filename: Optional custom output filename

    Returns:
        StegoAPIResult with operation details
    """
    try:
        logger.info(f"Received encode-text request: cover={file.filename}, text_len={len(text)}")
        contents = await file.read()
        stats.encoded_count += 1
        stats.total_bytes_processed += len(contents)

        img = load_image_from_input(file=BytesIO(contents))
        service = get_codec_service()
        stego_img, result = service.hide_text(img, text, filename)
        output_path = service.save_png(stego_img, _output_path(output_filename, "stego_text"))

        return send_response(
            200,
            f"Text hidden successfully as '{result.filename}'",
            str(output_path),
            {
                "filename": result.filename,
                "payload_size_bytes": result.payload_size_bytes,
                "used_capacity_bits": result.used_capacity_bits,
                "capacity_bits": result.capacity_bits,
            }
        )
    except Exception as e:
        return error_response(e, "encode-text")


@router.post("/encode-file", response_model=StegoAPIResult)
async def encode_file(
    cover: UploadFile = File(...),
    secret: UploadFile = File(...),
    output_filename: Optional[str] = Form(None),
):
    """
    Hide a file in an image

    Args:
        cover: Cover image
        secret: File to hide; its name is stored with it
        output_filename: Optional custom output filename

    Returns:
        StegoAPIResult with operation details
    """
    try:
        logger.info(f"Received encode-file request: cover={cover.filename}, secret={secret.filename}")
        cover_bytes = await cover.read()
        secret_bytes = await secret.read()
        stats.encoded_count += 1
        stats.total_bytes_processed += len(cover_bytes) + len(secret_bytes)

        img = load_image_from_input(file=BytesIO(cover_bytes))
        service = get_codec_service()
        stego_img, result = service.hide_file(img, secret.filename or "", secret_bytes)
        output_path = service.save_png(stego_img, _output_path(output_filename, "stego_file"))

        return send_response(
            200,
            f"File '{result.filename}' hidden successfully",
            str(output_path),
            {
                "filename": result.filename,
                "payload_size_bytes": result.payload_size_bytes,
                "used_capacity_bits": result.used_capacity_bits,
                "capacity_bits": result.capacity_bits,
            }
        )
    except Exception as e:
        return error_response(e, "encode-file")


@router.post("/decode", response_model=StegoAPIResult)
async def decode_image(
    file: UploadFile = File(...),
):
    """
    Reveal the payload hidden in an image

    The payload is written to the recovered-files directory under its
    stored name. Payloads that are valid UTF-8 are also returned as text.

    Args:
        file: The encoded image

    Returns:
        StegoAPIResult with the stored filename and payload details
    """
    try:
        logger.info(f"Received decode request: filename={file.filename}")
        contents = await file.read()
        stats.decoded_count += 1
        stats.total_bytes_processed += len(contents)

        img = load_image_from_input(file=BytesIO(contents))
        result = get_codec_service().reveal_to_directory(img, constants.get_recovered_dir())

        return send_response(
            200,
            f"File '{result.filename}' revealed successfully",
            str(result.output_path),
            {
                "filename": result.filename,
                "size_bytes": result.size_bytes,
                "text": result.as_text(),
            }
        )
    except Exception as e:
        return error_response(e, "decode")
