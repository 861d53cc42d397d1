import logging
import numpy as np

logger = logging.getLogger(__name__)


def preview_data(df, num_rows=4):
    """Log the first and last few rows of a result table."""
    logger.info("First few rows:")
    logger.info(df.head(num_rows))
    logger.info("\nLast few rows:")
    logger.info(df.tail(num_rows))


def broadcast_points(x, y, crs):
    """
    Broadcast x, y and crs to a common length and return them as lists.

    Scalars and length-1 sequences are recycled. Anything else must match,
    otherwise numpy raises ValueError.
    """
    xs, ys, crss = np.broadcast_arrays(
        np.atleast_1d(np.asarray(x, dtype=float)),
        np.atleast_1d(np.asarray(y, dtype=float)),
        np.atleast_1d(np.asarray(crs, dtype=object)),
    )
    return xs.tolist(), ys.tolist(), crss.tolist()
