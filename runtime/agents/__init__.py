"""
Agents used by the interviewer runtime.

InterviewAgent drives one interview from start to save:

- creates a session and asks the first question
- records each answer with its analysis
- decides completion and asks the next question
"""
