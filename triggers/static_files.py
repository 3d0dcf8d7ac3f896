"""
Static File Server - Serve the directory map script and stylesheet.

Routes:
    GET /api/static/multisite-directory/{*filename} -> {filename} under public/

Supported file types:
    .js   -> application/javascript
    .css  -> text/css
    .png / .svg -> images

Example:
    /api/static/multisite-directory/public/js/multisite-directory-map.js
"""

import os
import logging
import azure.functions as func

logger = logging.getLogger(__name__)

# Asset paths are relative to the function app root and must live under public/
APP_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PUBLIC_PREFIX = 'public/'

# Content type mapping
CONTENT_TYPES = {
    '.js': 'application/javascript; charset=utf-8',
    '.css': 'text/css; charset=utf-8',
    '.json': 'application/json; charset=utf-8',
    '.png': 'image/png',
    '.svg': 'image/svg+xml',
}


def static_files_handler(req: func.HttpRequest) -> func.HttpResponse:
    """
    Serve a file from public/.

    Args:
        req: HTTP request with filename route parameter

    Returns:
        File contents with appropriate content-type, or 400/404
    """
    filename = (req.route_params.get('filename') or '').replace('\\', '/')

    # Security: prevent directory traversal
    if '..' in filename.split('/') or filename.startswith('/') or not filename.startswith(PUBLIC_PREFIX):
        logger.warning(f"Blocked static file request: {filename}")
        return func.HttpResponse(
            "Invalid path",
            status_code=400
        )

    file_path = os.path.join(APP_ROOT, *filename.split('/'))

    _, ext = os.path.splitext(filename)
    content_type = CONTENT_TYPES.get(ext.lower())
    if content_type is None or not os.path.isfile(file_path):
        logger.info(f"Static file not found: {filename}")
        return func.HttpResponse(
            f"File not found: {filename}",
            status_code=404
        )

    with open(file_path, 'rb') as f:
        content = f.read()

    logger.debug(f"Serving static file: {filename} ({len(content)} bytes)")

    return func.HttpResponse(
        content,
        status_code=200,
        mimetype=content_type.split(';')[0],
        charset='utf-8',
        headers={
            'Cache-Control': 'public, max-age=300',
        }
    )
