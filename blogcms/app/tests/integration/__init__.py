############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Integration tests
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Tests against an in-memory SQLite database."""
