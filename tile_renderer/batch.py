"""
Batch processing module for rendering many tiles.

This module provides the BatchTileRenderer class for rendering a set of
feature documents into one PNG each. Every tile is an independent pipeline
(its own shapes, point buffers and figure), so tiles can be rendered in
parallel threads or processes without locking.

Example:
    >>> from tile_renderer import BatchTileRenderer
    >>> from pathlib import Path
    >>>
    >>> batch = BatchTileRenderer(sorted(Path("tiles").glob("*.yaml")), output_dir="out")
    >>> result = batch.render_tiles(parallel=True)
    >>> print(f"Rendered {len(result['successful_tiles'])} tiles")
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from tqdm import tqdm

from .api import render_features_file
from .config import Config
from .exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


def _render_tile_worker(*, input_path: str, output_path: str, config: Config) -> Optional[str]:
    """Process-safe worker for tile rendering."""

    # Force a non-interactive backend in worker processes.
    os.environ.setdefault("MPLBACKEND", "Agg")

    try:
        return render_features_file(input_path, output_path, config)
    except Exception as e:
        logger.error(f"Failed to render tile {input_path}: {e}")
        return None


class BatchTileRenderer:
    """
    Render multiple feature documents to tiles.

    Attributes:
        input_paths: Feature documents to render
        config: Configuration object shared by all tiles
        output_dir: Directory for rendered tiles
    """

    def __init__(
        self,
        input_paths: Iterable[Union[str, Path]],
        config: Optional[Config] = None,
        output_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize batch renderer.

        Args:
            input_paths: Feature documents (.yaml, .yml, .json)
            config: Optional Config object
            output_dir: Optional output directory (defaults to config.output_dir)
        """
        self.input_paths = [Path(p) for p in input_paths]
        self.config = config if config is not None else Config()
        self.output_dir = Path(output_dir) if output_dir is not None else self.config.output_dir

        logger.info(
            f"Initialized BatchTileRenderer: {len(self.input_paths)} inputs -> {self.output_dir}"
        )

    def output_path_for(self, input_path: Path) -> Path:
        return self.output_dir / f"{Path(input_path).stem}.png"

    def _check_output_collisions(self) -> None:
        """Raise when two inputs would be written to the same tile file."""
        claimed: Dict[Path, Path] = {}
        clashes = []
        for input_path in self.input_paths:
            tile_path = self.output_path_for(input_path)
            if tile_path in claimed:
                clashes.append(f"{claimed[tile_path]} and {input_path} -> {tile_path}")
            else:
                claimed[tile_path] = input_path

        if clashes:
            raise InvalidParameterError(
                "Inputs share an output tile name: " + "; ".join(clashes)
            )

    def render_tiles(
        self,
        parallel: bool = False,
        max_workers: Optional[int] = None,
        parallel_backend: str = "thread",
        show_progress: bool = True,
    ) -> Dict[str, Any]:
        """
        Render every input document.

        Args:
            parallel: Enable parallel processing (default: False)
            max_workers: Maximum parallel workers (default: executor default)
            parallel_backend: 'thread' or 'process'
            show_progress: Show a tqdm progress bar

        Returns:
            Dictionary with keys:
                - successful_tiles: Sorted list of paths to rendered tiles
                - failed_tiles: List of input paths that failed
                - total_time: Total rendering time in seconds

        Raises:
            InvalidParameterError: If parallel_backend is not supported, or if
                two inputs map to the same output tile
        """
        backend = (parallel_backend or "thread").strip().lower()
        if backend not in {"thread", "process"}:
            raise InvalidParameterError(
                f"Invalid parallel_backend='{parallel_backend}'. Use 'thread' or 'process'."
            )
        self._check_output_collisions()

        logger.info(
            f"Rendering {len(self.input_paths)} tiles "
            f"(parallel={parallel}, backend={backend}, max_workers={max_workers})"
        )

        self.output_dir.mkdir(parents=True, exist_ok=True)

        start_time = time.time()
        successful_tiles: List[str] = []
        failed_tiles: List[str] = []

        if parallel:
            Executor = ThreadPoolExecutor if backend == "thread" else ProcessPoolExecutor
            with Executor(max_workers=max_workers) as executor:
                if backend == "thread":
                    future_to_input = {
                        executor.submit(self._render_single_tile, input_path): input_path
                        for input_path in self.input_paths
                    }
                else:
                    # Processes require a top-level worker function.
                    future_to_input = {
                        executor.submit(
                            _render_tile_worker,
                            input_path=str(input_path),
                            output_path=str(self.output_path_for(input_path)),
                            config=self.config,
                        ): input_path
                        for input_path in self.input_paths
                    }

                futures = tqdm(
                    as_completed(future_to_input),
                    total=len(future_to_input),
                    desc="Rendering tiles",
                    unit="tile",
                    disable=not show_progress,
                )
                for future in futures:
                    input_path = future_to_input[future]
                    try:
                        tile_path = future.result()
                    except Exception as e:
                        logger.error(f"Tile {input_path} failed with error: {e}")
                        tile_path = None
                    self._record(input_path, tile_path, successful_tiles, failed_tiles)
        else:
            inputs = tqdm(
                self.input_paths,
                desc="Rendering tiles",
                unit="tile",
                disable=not show_progress,
            )
            for input_path in inputs:
                tile_path = self._render_single_tile(input_path)
                self._record(input_path, tile_path, successful_tiles, failed_tiles)

        total_time = time.time() - start_time
        success_count = len(successful_tiles)
        total_count = len(self.input_paths)
        success_rate = success_count / total_count * 100 if total_count > 0 else 0

        logger.info(
            f"Batch rendering complete: {success_count}/{total_count} tiles "
            f"({success_rate:.1f}%) in {total_time:.1f}s"
        )
        if failed_tiles:
            logger.warning(f"Failed tiles: {failed_tiles}")

        return {
            "successful_tiles": sorted(successful_tiles),
            "failed_tiles": failed_tiles,
            "total_time": total_time,
        }

    @staticmethod
    def _record(
        input_path: Path,
        tile_path: Optional[str],
        successful_tiles: List[str],
        failed_tiles: List[str],
    ) -> None:
        if tile_path:
            successful_tiles.append(tile_path)
            logger.debug(f"Tile {input_path} completed: {tile_path}")
        else:
            failed_tiles.append(str(input_path))
            logger.warning(f"Tile {input_path} failed")

    def _render_single_tile(self, input_path: Path) -> Optional[str]:
        """
        Render a single tile (internal method).

        Returns:
            Path to rendered tile, or None if failed
        """
        try:
            return render_features_file(input_path, self.output_path_for(input_path), self.config)
        except Exception as e:
            logger.error(f"Failed to render tile {input_path}: {e}")
            return None

    def cleanup_tiles(self, keep_latest: Optional[int] = None) -> int:
        """
        Remove rendered tiles from the output directory.

        Args:
            keep_latest: If specified, keep the N most recently modified tiles

        Returns:
            Number of files deleted
        """
        logger.info(f"Cleaning up tiles from {self.output_dir}")

        if not self.output_dir.exists():
            logger.warning(f"Output directory does not exist: {self.output_dir}")
            return 0

        tile_files = sorted(self.output_dir.glob("*.png"), key=lambda p: p.stat().st_mtime)
        if not tile_files:
            logger.info("No tiles found to clean up")
            return 0

        if keep_latest is not None and keep_latest > 0:
            files_to_delete = tile_files[:-keep_latest] if len(tile_files) > keep_latest else []
            logger.info(f"Keeping {min(keep_latest, len(tile_files))} most recent tiles")
        else:
            files_to_delete = tile_files

        deleted_count = 0
        for file_path in files_to_delete:
            try:
                file_path.unlink()
                deleted_count += 1
                logger.debug(f"Deleted: {file_path}")
            except OSError as e:
                logger.warning(f"Failed to delete {file_path}: {e}")

        logger.info(f"Cleanup complete: deleted {deleted_count} tiles")
        return deleted_count
