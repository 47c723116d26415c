# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Media Enrichment and Description (MEAD) schema packages."""
