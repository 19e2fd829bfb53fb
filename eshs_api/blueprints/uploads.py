"""Uploads blueprint: attachment ingestion for documents and the legal register."""
from flask import Blueprint, request, jsonify, current_app
from pydantic import ValidationError as PydanticValidationError
from eshs_shared.schemas import PresignedUploadRequest
from ..config import MAX_UPLOAD_BYTES
from ..utils import api_error, handle_api_exception


def create_blueprint(proxy_storage, presigned_storage):
    bp = Blueprint('uploads', __name__, url_prefix='/api')

    @bp.route('/upload', methods=['POST'])
    def upload_file():
        """Receive a multipart ``file`` and store it; responds with its public URL."""
        upload = request.files.get('file')
        if upload is None or not upload.filename:
            return api_error('File is required')

        max_bytes = current_app.config.get('MAX_UPLOAD_BYTES', MAX_UPLOAD_BYTES)
        payload = upload.read(max_bytes + 1)
        if not payload:
            return api_error('File is empty')
        if len(payload) > max_bytes:
            return api_error(
                f'File exceeds the {max_bytes // (1024 * 1024)} MB upload limit',
                details={'filename': upload.filename}
            )

        try:
            result = proxy_storage.ingest(upload.filename, upload.mimetype, payload)
        except Exception as e:
            return handle_api_exception(e, 'upload file')
        return jsonify(result), 201

    @bp.route('/presigned', methods=['POST'])
    def create_presigned_upload():
        """Issue a pre-signed PUT URL for ``{fileName, contentType}``."""
        data = request.get_json(silent=True)
        try:
            params = PresignedUploadRequest.model_validate(data if isinstance(data, dict) else {})
        except PydanticValidationError:
            return api_error('fileName and contentType are required')

        try:
            result = presigned_storage.ingest(params.file_name, params.content_type)
        except Exception as e:
            return handle_api_exception(e, 'generate presigned upload URL')
        return jsonify(result)

    return bp
