"""Example usage of the layer content view engine."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from image_layer_view import (
    AnalysisClient,
    ClientConfig,
    LayerViewError,
    ViewOptions,
    download_links,
    render_layer,
    summarize_image,
    toggle,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Analyze an image and print its largest layer."""
    config = ClientConfig.from_env()

    try:
        async with AnalysisClient(config) as client:
            images = await client.latest_images()
            logger.info(f"Latest images: {[image.name for image in images]}")

            result = await client.analyze("redis:alpine")

        overview = summarize_image(result)
        logger.info(f"Image: {overview.display_name}")
        logger.info(f"Efficiency: {overview.report.score_text}")
        logger.info(f"Wasted: {overview.report.wasted_size} bytes")
        for entry in overview.report.entries[:5]:
            logger.info(f"  {entry.path} x{entry.count}: {entry.total_size}")

        index = max(
            range(len(result.layers)),
            key=lambda i: result.layers[i].unpacked_size,
        )
        layer = result.layers[index]
        logger.info(f"Largest layer {index}: {layer.command}")

        # Only modified or removed files, with /etc opened
        options = toggle(ViewOptions.for_mode(1), "etc")
        rendered = render_layer(result, index, options)
        links = download_links(result, index, rendered)
        for row in rendered.rows:
            marker = "-" if row.is_expanded else "+" if row.is_expandable else " "
            line = f"{'  ' * row.depth}{marker} {row.display_name} ({row.size})"
            logger.info(line)
            if row.key in links:
                logger.info(f"{'  ' * row.depth}  download: {links[row.key]}")

    except LayerViewError as e:
        logger.error(f"Layer view error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
