"""View rendering module for HTML templates.

Views prepare context data and render Jinja2 templates; routers stay free of
presentation logic.
"""
