from fastapi import Request

from services.board import Board


def get_board(request: Request) -> Board:
    return request.app.state.board
