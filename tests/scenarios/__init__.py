"""
End-to-end scenario tests for duplicatable admin screens.

Each scenario drives a Starlette application over HTTP the way a browser
would: follow the action button, submit, follow the redirect.
"""
