############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Test package
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Tests for blogcms."""
