from fastapi import Request

from leakscan.storage import MemStorage


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_llm(request: Request):
    return request.app.state.llm
