"""
API 集成测试
"""

import threading

import pytest
from fastapi.testclient import TestClient

from xiangqi_core.api.app import create_app
from xiangqi_core.api.game_manager import GameManager
from xiangqi_core.api.models import GameMode
from xiangqi_core.fen import INITIAL_FEN

CANNON_TO_CENTER = {"from": {"row": 7, "col": 7}, "to": {"row": 7, "col": 4}}


@pytest.fixture
def client():
    """创建测试客户端"""
    app = create_app(GameManager())
    with TestClient(app) as c:
        yield c


def create_game(client, **payload) -> dict:
    response = client.post("/games", json=payload)
    assert response.status_code == 200
    return response.json()


class TestHealthEndpoints:
    """健康检查端点测试"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Xiangqi API"
        assert "version" in data

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAIEndpoints:
    def test_get_ai_info(self, client):
        response = client.get("/ai/info")
        assert response.status_code == 200
        data = response.json()
        assert "random" in data["available_strategies"]
        assert "llm" in data["available_strategies"]
        assert data["difficulties"] == ["easy", "medium", "hard"]


class TestGameEndpoints:
    """游戏端点测试"""

    def test_create_game_human_vs_human(self, client):
        data = create_game(client, mode="human_vs_human")
        assert data["mode"] == "human_vs_human"
        assert data["current_turn"] == "red"
        assert data["result"] == "ongoing"
        assert data["winner"] is None
        assert data["fen"] == INITIAL_FEN
        assert len(data["pieces"]) == 32
        assert len(data["legal_moves"]) == 44
        assert data["last_move"] is None

    def test_create_game_from_fen(self, client):
        data = create_game(client, mode="human_vs_human", fen="4k4/9/9/9/9/9/9/9/9/4K4 b - - 0 1")
        assert data["current_turn"] == "black"
        assert len(data["pieces"]) == 2

    def test_create_game_bad_fen(self, client):
        response = client.post("/games", json={"mode": "human_vs_human", "fen": "9/9/9"})
        assert response.status_code == 400
        assert "Invalid FEN" in response.json()["detail"]

    def test_create_game_unknown_strategy(self, client):
        response = client.post("/games", json={"mode": "human_vs_ai", "strategy": "minimax"})
        assert response.status_code == 400

    def test_get_game(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        response = client.get(f"/games/{game_id}")
        assert response.status_code == 200
        assert response.json()["game_id"] == game_id

    def test_get_unknown_game(self, client):
        assert client.get("/games/nope").status_code == 404

    def test_list_and_delete(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        assert game_id in client.get("/games").json()["games"]
        assert client.delete(f"/games/{game_id}").status_code == 200
        assert client.get(f"/games/{game_id}").status_code == 404
        assert client.delete(f"/games/{game_id}").status_code == 404

    def test_fen(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        assert client.get(f"/games/{game_id}/fen").json()["fen"] == INITIAL_FEN


class TestMoveEndpoints:
    """走棋端点测试"""

    def test_valid_move(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        response = client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["game_state"]["current_turn"] == "black"
        assert data["game_state"]["last_move"] == CANNON_TO_CENTER
        assert data["ai_move"] is None

    def test_invalid_move(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        response = client.post(
            f"/games/{game_id}/move",
            json={"from": {"row": 9, "col": 4}, "to": {"row": 7, "col": 4}},
        )
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid move"

    def test_out_of_range_request(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        response = client.post(
            f"/games/{game_id}/move",
            json={"from": {"row": 10, "col": 4}, "to": {"row": 7, "col": 4}},
        )
        assert response.status_code == 422

    def test_ai_replies(self, client):
        game_id = create_game(client, mode="human_vs_ai", ai_side="black", seed=3)["game_id"]
        data = client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER).json()
        assert data["success"] is True
        assert data["ai_move"] is not None
        assert data["game_state"]["current_turn"] == "red"
        assert data["game_state"]["move_count"] == 2

    def test_not_human_turn(self, client):
        game_id = create_game(client, mode="human_vs_ai", ai_side="red")["game_id"]
        data = client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER).json()
        assert data["success"] is False
        assert data["error"] == "It's AI's turn"

    def test_ai_vs_ai(self, client):
        game_id = create_game(client, mode="ai_vs_ai", seed=5)["game_id"]
        for expected in (1, 2, 3):
            data = client.post(f"/games/{game_id}/ai-move").json()
            assert data["success"] is True
            assert data["game_state"]["move_count"] == expected

    def test_llm_without_transport_falls_back(self, client):
        """没有外部服务时用随机走法替补"""
        game_id = create_game(client, mode="ai_vs_ai", strategy="llm")["game_id"]
        data = client.post(f"/games/{game_id}/ai-move").json()
        assert data["success"] is True
        assert data["ai_move"] is not None

    def test_ai_move_not_ai_turn(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        data = client.post(f"/games/{game_id}/ai-move").json()
        assert data["success"] is False

    def test_move_after_game_over(self, client):
        game_id = create_game(
            client, mode="human_vs_human", fen="R3k4/9/9/9/9/9/9/9/9/4K4 w - - 0 1"
        )["game_id"]
        capture = {"from": {"row": 0, "col": 0}, "to": {"row": 0, "col": 4}}
        data = client.post(f"/games/{game_id}/move", json=capture).json()
        assert data["game_state"]["result"] == "red_win"
        assert data["game_state"]["winner"] == "red"

        data = client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER).json()
        assert data["success"] is False
        assert data["error"] == "Game has ended"

    def test_highlights(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        data = client.get(f"/games/{game_id}/moves", params={"row": 9, "col": 1}).json()
        assert data["destinations"] == [{"row": 7, "col": 0}, {"row": 7, "col": 2}]

        data = client.get(f"/games/{game_id}/moves", params={"row": 0, "col": 1}).json()
        assert data["destinations"] == []

        data = client.get(f"/games/{game_id}/moves", params={"row": 12, "col": 1}).json()
        assert data["destinations"] == []

    def test_undo(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER)
        data = client.post(f"/games/{game_id}/undo").json()
        assert data["success"] is True
        assert data["game_state"]["fen"] == INITIAL_FEN

        data = client.post(f"/games/{game_id}/undo").json()
        assert data["success"] is False


class TestHistoryEndpoint:
    def test_history(self, client):
        game_id = create_game(client, mode="human_vs_human")["game_id"]
        client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER)
        data = client.get(f"/games/{game_id}/history").json()
        assert data["game_id"] == game_id
        assert [m["notation"] for m in data["moves"]] == ["h2e2"]
        assert data["moves"][0]["side"] == "red"

    def test_history_unknown_game(self, client):
        assert client.get("/games/nope/history").status_code == 404


class TestSuggestionServiceFailure:
    """外部服务出错时 AI 仍然走棋"""

    @staticmethod
    def broken_completion(system: str, prompt: str) -> str:
        raise RuntimeError("HTTP 503 from suggestion service")

    def test_ai_move_falls_back(self):
        app = create_app(GameManager(completion=self.broken_completion))
        with TestClient(app) as client:
            game_id = create_game(client, mode="ai_vs_ai", strategy="llm", seed=7)["game_id"]
            data = client.post(f"/games/{game_id}/ai-move").json()
            assert data["success"] is True
            assert data["ai_move"] is not None
            assert data["game_state"]["move_count"] == 1

    def test_ai_reply_falls_back(self):
        app = create_app(GameManager(completion=self.broken_completion))
        with TestClient(app) as client:
            game_id = create_game(client, mode="human_vs_ai", strategy="llm", ai_side="black")["game_id"]
            data = client.post(f"/games/{game_id}/move", json=CANNON_TO_CENTER).json()
            assert data["success"] is True
            assert data["ai_move"] is not None
            assert data["game_state"]["current_turn"] == "red"


class TestConcurrentMoves:
    """同一局的并发走棋"""

    def test_same_side_moves_once(self):
        manager = GameManager()
        for _ in range(20):
            game = manager.create_game(GameMode.HUMAN_VS_HUMAN)
            barrier = threading.Barrier(2)
            results = []

            def play(move):
                barrier.wait()
                results.append(manager.make_move(game.game_id, *move))

            threads = [
                threading.Thread(target=play, args=((7, 7, 7, 4),)),
                threading.Thread(target=play, args=((9, 1, 7, 2),)),
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

            assert sorted(results) == [False, True]
            assert len(game.move_history) == 1
            assert game.current_turn.value == "black"

    def test_moves_and_undos_stay_consistent(self):
        manager = GameManager()
        game = manager.create_game(GameMode.AI_VS_AI, seed=11)

        def worker(action):
            for _ in range(30):
                action(game.game_id)

        threads = [
            threading.Thread(target=worker, args=(manager.play_ai_move,)),
            threading.Thread(target=worker, args=(manager.play_ai_move,)),
            threading.Thread(target=worker, args=(manager.undo_move,)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # 历史记录与回合交替一致
        sides = [record.side for record in game.move_history]
        assert all(a != b for a, b in zip(sides, sides[1:]))
        if sides:
            assert game.current_turn == sides[-1].opposite
        replay = GameManager().create_game(GameMode.HUMAN_VS_HUMAN)
        for record in game.move_history:
            assert replay.make_move(record.move)
        assert replay.fen() == game.fen()

    def test_game_lock_is_per_game(self):
        manager = GameManager()
        first = manager.create_game(GameMode.HUMAN_VS_HUMAN)
        second = manager.create_game(GameMode.HUMAN_VS_HUMAN)
        assert manager.game_lock(first.game_id) is manager.game_lock(first.game_id)
        assert manager.game_lock(first.game_id) is not manager.game_lock(second.game_id)
