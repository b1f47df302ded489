"""Minimal demonstration of the session controller."""

import asyncio

from code_assistant.api.service import get_default_session, session_snapshot

if __name__ == "__main__":
    question = "Python list comprehension example"
    session = get_default_session()
    asyncio.run(session.submit(question))
    snap = session_snapshot(session)
    print("User:", question)
    if snap["last_error"]:
        print("Error:", snap["last_error"])
    else:
        answer = snap["history"][-1]
        print(f"Assistant ({answer['answer_kind']}):", answer["response"])
