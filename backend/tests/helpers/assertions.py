"""Assertion helper utilities for tests."""

from __future__ import annotations


def assert_problem(resp, status: int, *, code: str | None = None, detail: str | None = None) -> dict:
    """Check that ``resp`` is an RFC 7807 problem with the given fields.

    Returns
    -------
    dict
        Decoded problem body for further assertions.
    """
    assert resp.status_code == status, resp.get_data(as_text=True)
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == status
    assert body["request_id"]
    if code is not None:
        assert body["code"] == code
    if detail is not None:
        assert body["detail"] == detail
    return body
