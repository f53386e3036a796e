"""
Line recognition pipeline.

Stages:
- recognition - run the external line recognizer over the line segment
  images of selected pages and track completion from its output files
"""
