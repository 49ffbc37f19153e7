# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""vmhop - Pick a cloud VM and SSH into it, remembering odd ports."""

__version__ = "0.2.0"
