import json
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from app.models import AuditLog, KanbanColumn, PendingIssue
from app.services.kanban_service import get_board, move_issue, purge_completed, seed_default_columns


def _issue(db, title, column_key="backlog", status="open"):
    issue = PendingIssue(title=title, column_key=column_key, status=status)
    db.add(issue)
    db.commit()
    db.refresh(issue)
    return issue


class TestSeed:
    def test_seed_is_idempotent(self, db):
        assert seed_default_columns(db) == 5
        assert seed_default_columns(db) == 0
        assert db.query(KanbanColumn).count() == 5

    def test_restores_missing_column(self, db):
        seed_default_columns(db)
        db.query(KanbanColumn).filter(KanbanColumn.key == "review").delete()
        db.commit()

        assert seed_default_columns(db) == 1


class TestBoard:
    """Board assembly from columns and cards."""

    def test_columns_in_order(self, db):
        seed_default_columns(db)

        board = get_board(db)

        assert [column.key for column in board.columns] == [
            "backlog",
            "todo",
            "in_progress",
            "review",
            "done",
        ]
        assert board.total == 0

    def test_cards_are_grouped(self, db):
        seed_default_columns(db)
        _issue(db, "Radar sem energia")
        _issue(db, "Trocar lacre", column_key="todo")
        _issue(db, "Cabo rompido", column_key="todo")

        board = get_board(db)
        totals = {column.key: column.total for column in board.columns}

        assert totals["backlog"] == 1
        assert totals["todo"] == 2
        assert board.total == 3

    def test_closed_and_orphan_cards_are_hidden(self, db):
        seed_default_columns(db)
        _issue(db, "Arquivada", status="closed")
        _issue(db, "Órfã", column_key="coluna-removida")
        db.query(KanbanColumn).filter(KanbanColumn.key == "review").update({"is_active": False})
        db.commit()
        _issue(db, "Em coluna inativa", column_key="review")

        board = get_board(db)

        assert board.total == 0
        assert "review" not in [column.key for column in board.columns]


class TestMoveIssue:
    def test_done_stamps_completion(self, db):
        seed_default_columns(db)
        issue = _issue(db, "Aferir radar")

        moved = move_issue(db, issue.id, "done")
        assert moved.column_key == "done"
        assert moved.completed_at is not None

        reopened = move_issue(db, issue.id, "in_progress")
        assert reopened.completed_at is None

    def test_unknown_column(self, db):
        seed_default_columns(db)
        issue = _issue(db, "Aferir radar")

        with pytest.raises(HTTPException) as exc_info:
            move_issue(db, issue.id, "arquivo")

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail == "Coluna 'arquivo' não existe ou está inativa."

    def test_unknown_issue(self, db):
        seed_default_columns(db)

        with pytest.raises(HTTPException) as exc_info:
            move_issue(db, 404, "done")

        assert exc_info.value.status_code == 404

    def test_move_is_audited(self, db):
        seed_default_columns(db)
        issue = _issue(db, "Aferir radar")

        move_issue(db, issue.id, "todo")

        entry = db.query(AuditLog).filter(AuditLog.table_name == "pending_issues").one()
        assert entry.action == "UPDATE"
        assert json.loads(entry.old_data)["column_key"] == "backlog"
        assert json.loads(entry.new_data)["column_key"] == "todo"


class TestPurgeCompleted:
    NOW = datetime(2026, 5, 10, 12, 0)

    def _done(self, db, title, hours_ago):
        issue = _issue(db, title, column_key="done")
        issue.completed_at = self.NOW - timedelta(hours=hours_ago)
        db.commit()
        return issue

    def test_only_cards_past_retention(self, db):
        old = self._done(db, "Troca de lâmpada", hours_ago=30)
        self._done(db, "Ajuste de câmera", hours_ago=2)
        _issue(db, "Em aberto")

        result = purge_completed(db, now=self.NOW)

        assert result.removidas == 1
        assert [(i.id, i.title) for i in result.issues] == [(old.id, "Troca de lâmpada")]
        assert {i.title for i in db.query(PendingIssue).all()} == {"Ajuste de câmera", "Em aberto"}

    def test_removal_is_audited(self, db):
        old = self._done(db, "Troca de lâmpada", hours_ago=48)

        purge_completed(db, now=self.NOW)

        entry = db.query(AuditLog).one()
        assert entry.action == "DELETE"
        assert entry.record_id == old.id
        assert json.loads(entry.old_data)["title"] == "Troca de lâmpada"
        assert entry.new_data is None

    def test_nothing_to_purge(self, db):
        assert purge_completed(db, now=self.NOW).removidas == 0


class TestKanbanApi:
    def test_board_endpoint(self, client, user_headers, db):
        _issue(db, "Radar sem energia")

        response = client.get("/api/kanban/quadro", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert len(body["columns"]) == 5
        assert body["columns"][0]["issues"][0]["title"] == "Radar sem energia"

    def test_move_endpoint(self, client, user_headers, regular_user, db):
        issue = _issue(db, "Radar sem energia")

        response = client.put(
            f"/api/kanban/issues/{issue.id}/mover", json={"column_key": "done"}, headers=user_headers
        )

        assert response.status_code == 200
        assert response.json()["column_key"] == "done"
        assert response.json()["completed_at"] is not None
        db.expire_all()
        assert db.query(AuditLog).one().user_id == regular_user.id

    def test_move_requires_auth(self, client):
        response = client.put("/api/kanban/issues/1/mover", json={"column_key": "done"})

        assert response.status_code == 401

    def test_purge_endpoint_is_admin_only(self, client, user_headers, admin_headers, db):
        issue = _issue(db, "Troca de lâmpada", column_key="done")
        issue.completed_at = datetime.now() - timedelta(days=3)
        db.commit()

        assert client.post("/api/kanban/limpar-concluidas", headers=user_headers).status_code == 403

        response = client.post("/api/kanban/limpar-concluidas", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["removidas"] == 1
        assert response.json()["issues"][0]["title"] == "Troca de lâmpada"
