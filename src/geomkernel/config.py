# -*- coding: utf-8 -*-
"""
geomkernel tolerances and logging defaults
- Values below are the package defaults; each one can be overridden through an
  environment variable read once at import time.
  Environment variables:
    GEOMKERNEL_EPSILON        (default: "1e-6")
    GEOMKERNEL_ANGLE_EPSILON  (default: same as GEOMKERNEL_EPSILON)
    GEOMKERNEL_LOG_LEVEL      (default: "WARNING")
"""

import os

# Absolute tolerance for every near-zero test: vector normalization, plane
# validation, orientation signs, collinearity and coplanarity.
EPSILON = float(os.getenv("GEOMKERNEL_EPSILON", "1e-6"))

# Angular tie tolerance (radians) used by the convex hull sort.
ANGLE_EPSILON = float(os.getenv("GEOMKERNEL_ANGLE_EPSILON", str(EPSILON)))

# Level name handed to logging.basicConfig by the example scripts.
LOG_LEVEL = os.getenv("GEOMKERNEL_LOG_LEVEL", "WARNING").upper()
