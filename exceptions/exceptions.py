"""
Custom exceptions for the interviewer backend.

Shared exception types, used across:

  - core/api/          (OpenAI wrapper)
  - core/interview/    (question generation, analysis, synthesis)
  - runtime/           (stores, InterviewAgent, HTTP routes)
"""


class SessionNotFoundError(Exception):
    """
    Raised when a session id is unknown, either in the in-memory
    session store or among the saved session files.

    The HTTP layer turns this into a 404 response.
    """

    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class ModelNotConfiguredError(Exception):
    """
    Raised when the OpenAI client is requested while OPENAI_API_KEY is unset.
    """

    def __init__(self, details=None):
        self.details = details or "OPENAI_API_KEY is not set; AI features are disabled."
        super().__init__(self.details)


class ModelBackendError(Exception):
    """
    Raised when a call to the language model fails: transport error,
    non-success status, or an empty / unusable reply.

    Callers in core/interview/ always catch this and fall back to canned
    questions or naive summaries.
    """

    def __init__(self, details, cause=None):
        self.details = details
        self.cause = cause
        msg = f"Language model request failed: {details}"
        super().__init__(msg)
