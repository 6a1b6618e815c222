"""Infrastructure components for diffsage.

This layer holds the line-level analysis machinery and external system
interactions:
- line_features / line_index / claims / comparison - analysis primitives
- detectors/ - change detection phases
- text_provider/ - reading texts from files, git revisions or GitHub
- github/ - GitHub Actions outputs
"""
