############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: API endpoints package and router configuration
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""API endpoints for blogcms."""

from fastapi import APIRouter

from blogcms.app.api.admin_comments import router as admin_comments_router
from blogcms.app.api.admin_content import pages_router, posts_router
from blogcms.app.api.auth import router as auth_router
from blogcms.app.api.blog import router as blog_router
from blogcms.app.api.health import router as health_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health_router)
api_router.include_router(auth_router, prefix="/api/auth", tags=["auth"])
api_router.include_router(blog_router, prefix="/api/blog", tags=["blog"])
api_router.include_router(posts_router, prefix="/api/admin/posts", tags=["admin"])
api_router.include_router(pages_router, prefix="/api/admin/pages", tags=["admin"])
api_router.include_router(admin_comments_router, prefix="/api/admin/comments", tags=["admin"])

__all__ = ["api_router"]
