"""
Server Module
=============

HTTP surface of WindowCast.

Components:
    - create_app: FastAPI app dispatching image vs. control-page requests
    - HttpServer: uvicorn runner on a background thread
    - render_control_page: HTML viewer that polls the image endpoint
"""

from windowcast.server.app import create_app, image_response
from windowcast.server.page import render_control_page
from windowcast.server.runner import HttpServer


__all__ = [
    "HttpServer",
    "create_app",
    "image_response",
    "render_control_page",
]
