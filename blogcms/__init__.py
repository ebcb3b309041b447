############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Root package initialization and version definition
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""blogcms - Blog and content management service."""

__version__ = "0.3.0"
