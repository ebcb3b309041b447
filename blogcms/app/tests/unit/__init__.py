############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Unit tests
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Unit tests that need no database."""
