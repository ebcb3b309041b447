############################################################
#
# blogcms - Blog and Content Management Service
#
# __init__.py: Core content logic package
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Content core: slugs, lifecycle, search and moderation."""
