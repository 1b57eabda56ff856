"""Async functional analysis operations."""

from .core.client import AnalysisClient
from .core.types import ClientConfig
from .models import AnalysisResult, ImageReference


async def analyze_image(
    server_url: str, image: str, arch: str = "", timeout: int = 10
) -> AnalysisResult:
    """분석 서버에서 이미지 분석 결과를 조회합니다.

    Args:
        server_url: 분석 서버 URL (예: "http://localhost:7001")
        image: 이미지 이름 (예: "redis:alpine", "vicanso/diving")
        arch: 아키텍처 (선택사항, 예: "amd64", "arm64")
        timeout: 요청 타임아웃 (초, 기본값: 10초)

    Returns:
        AnalysisResult: 모든 레이어 파일 트리에 key가 지정된 분석 결과

    Raises:
        UpstreamError: 서버 응답 실패 또는 연결 실패 시
            (서버가 보낸 message를 그대로 사용)
        InvalidInputError: 응답 형식이 올바르지 않은 경우

    Examples:
        # 이미지 분석
        result = await analyze_image("http://localhost:7001", "redis:alpine")
        print(f"레이어 수: {len(result.layers)}")

        # arm64 이미지 분석
        result = await analyze_image(
            "http://localhost:7001", "redis:alpine", arch="arm64"
        )
    """
    config = ClientConfig(url=server_url, timeout=timeout)
    async with AnalysisClient(config) as client:
        return await client.analyze(image, arch)


async def list_latest_images(
    server_url: str, timeout: int = 10
) -> list[ImageReference]:
    """최근 분석된 이미지 목록을 조회합니다.

    Args:
        server_url: 분석 서버 URL (예: "http://localhost:7001")
        timeout: 요청 타임아웃 (초, 기본값: 10초)

    Returns:
        list[ImageReference]: 이미지 이름과 아키텍처 목록

    Raises:
        UpstreamError: 요청 실패 시

    Examples:
        # 최근 이미지 조회
        images = await list_latest_images("http://localhost:7001")
        for image in images:
            print(image.name, image.arch or "기본 아키텍처")
    """
    config = ClientConfig(url=server_url, timeout=timeout)
    async with AnalysisClient(config) as client:
        return await client.latest_images()
