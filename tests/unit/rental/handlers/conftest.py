from dataclasses import dataclass

import pytest

from rental_escrow.rental.handlers import dependencies


@pytest.fixture(autouse=True)
def components(monkeypatch):
    """テストごとに新しいインメモリの依存関係に差し替える"""
    fresh = dependencies.build_components("memory")
    monkeypatch.setattr(dependencies, "components", fresh)
    return fresh


@pytest.fixture
def lambda_context():
    """Lambda コンテキストのフィクスチャ"""

    @dataclass
    class LambdaContext:
        function_name: str = "rental-escrow-test"
        memory_limit_in_mb: int = 128
        invoked_function_arn: str = (
            "arn:aws:lambda:ap-northeast-1:123456789012:function:rental-escrow-test"
        )
        aws_request_id: str = "52fdfc07-2182-454f-963f-5f0f9a621d72"

    return LambdaContext()
