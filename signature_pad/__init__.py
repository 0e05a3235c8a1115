"""
Signature pad feature.

Role-gated freehand signature capture: an initiator requests a signature,
the signer draws it on a DPI-aware surface that keeps its ink across
resizes, and the result is exported as encoded image bytes.
"""
