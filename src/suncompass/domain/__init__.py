# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: pure solar position computation.

Only the standard library and NumPy; no file I/O, no logging handlers.
"""
