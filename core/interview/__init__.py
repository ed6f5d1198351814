"""
Interview logic for the Thai in-depth interviewer.

Leaf utilities:
- template: {placeholder} filling
- sanitizer: brand stripping / brand detection
- question_bank: topic categories and canned questions

Model-backed components (each with a deterministic fallback):
- question_generator: next interview question
- answer_analyzer: per-answer insights
- insight_synthesizer: whole-interview narrative
"""
