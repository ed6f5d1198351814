"""
Pydantic models used by the interviewer runtime.

Split into:
- session_models: InterviewSession + AnswerRecord + SessionStatus
- config_models: InterviewConfig + ModelSettings + merge helpers
- api_models: HTTP request/response schemas
"""
