import redis

from courtbook import main


class DownRedis:
    def ping(self):
        raise redis.ConnectionError("connection refused")


def test_health_reports_dependencies(client, monkeypatch, session_factory, fake_redis):
    monkeypatch.setattr(main, "SessionLocal", session_factory)
    monkeypatch.setattr(main, "redis_client", fake_redis)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"database": True, "redis": True}


def test_health_with_redis_down(client, monkeypatch, session_factory):
    monkeypatch.setattr(main, "SessionLocal", session_factory)
    monkeypatch.setattr(main, "redis_client", DownRedis())

    assert client.get("/health").json() == {"database": True, "redis": False}
