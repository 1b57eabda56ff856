"""Loading saved analysis results from disk."""

import json
import logging
from pathlib import Path

import aiofiles

from ..exceptions import InvalidInputError
from ..models import AnalysisResult
from .decode import parse_analysis_result

logger = logging.getLogger(__name__)


async def load_analysis_file(path: str | Path) -> AnalysisResult:
    """Read an analysis result saved as JSON and decode it.

    Args:
        path: Path to a JSON file holding an /api/analyze response body

    Returns:
        Keyed AnalysisResult

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputError: If the file is not a valid analysis result,
            or is nested too deep to decode
    """
    file_path = Path(path)
    async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
        content = await f.read()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON in {file_path}: {e}") from e
    except RecursionError as e:
        raise InvalidInputError(f"JSON in {file_path} is nested too deep") from e

    result = parse_analysis_result(data).with_keys()
    logger.debug("Loaded %s with %d layers", file_path, len(result.layers))
    return result
