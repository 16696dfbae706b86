import os
import pickle

import gin
import numpy as np
import torch

from envs.rubik.stickers import CUBE_SIZE, FACE_STICKERS, GOAL_STATES, N_STICKERS


class CostOracleError(RuntimeError):
    """The cost model could not be loaded or evaluated."""


def encode_stickers(states):
    """
    One-hot encoding of sticker arrays for the cost model.

    Returns a float32 array of shape `(B, 3, 3, 36)`: for each face cell the
    channel `color * 6 + face` is set.
    """
    states = np.asarray(states, dtype=np.intp).reshape(-1, N_STICKERS)
    if states.size and (states.min() < 0 or states.max() > 5):
        raise ValueError("sticker colors must be painted colors in [0, 6)")

    face, cell = np.divmod(np.arange(N_STICKERS), FACE_STICKERS)
    row, column = np.divmod(cell, CUBE_SIZE)
    batch = np.arange(len(states))[:, np.newaxis]

    array = np.zeros((len(states), CUBE_SIZE, CUBE_SIZE, 6 * 6), dtype=np.float32)
    array[batch, row, column, states * 6 + face] = 1.
    return array


def find_checkpoint(checkpoint_path):
    """A checkpoint file, or `model.pt` from the latest numbered sub-directory."""
    if os.path.isfile(checkpoint_path):
        return checkpoint_path

    if not os.path.isdir(checkpoint_path):
        raise CostOracleError(f"Checkpoint path does not exist: {checkpoint_path}")

    subdirs = [d for d in os.listdir(checkpoint_path) if os.path.isdir(os.path.join(checkpoint_path, d))]
    numeric_subdirs = sorted(
        [d for d in subdirs if d.isdigit()],
        key=lambda x: int(x),
        reverse=True
    )

    if not numeric_subdirs:
        raise CostOracleError(f"No valid checkpoint folders found in {checkpoint_path}")

    latest_dir = os.path.join(checkpoint_path, numeric_subdirs[0])
    checkpoint_file = os.path.join(latest_dir, 'model.pt')
    if not os.path.isfile(checkpoint_file):
        raise CostOracleError(f"No model.pt found in {latest_dir}")
    return checkpoint_file


@gin.configurable
class CostEstimator:
    """
    Batched estimate of the twists left to solve each state, backed by a
    torch model. The checkpoint is loaded once by `construct_networks` and
    the model is reused for every following call.
    """

    def __init__(self, model, checkpoint_path=None, batch_size=None):
        self.checkpoint_path = checkpoint_path
        self.batch_size = batch_size
        self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        self.model = model.to(self.device)
        self.loaded = False

    def construct_networks(self):
        if self.loaded:
            return

        if self.checkpoint_path is not None:
            checkpoint_file = find_checkpoint(self.checkpoint_path)
            try:
                state_dict = torch.load(checkpoint_file, map_location=self.device, weights_only=True)
                self.model.load_state_dict(state_dict)
            except (OSError, EOFError, RuntimeError, ValueError, pickle.UnpicklingError) as e:
                raise CostOracleError(f"Could not load cost model from {checkpoint_file}") from e

        self.model.eval()
        self.loaded = True

    def estimate(self, batch, batch_size=None):
        self.construct_networks()
        try:
            x = encode_stickers(batch)
        except ValueError as e:
            raise CostOracleError("Cannot encode states for the cost model") from e
        if len(x) == 0:
            return []

        batch_size = batch_size or self.batch_size or len(x)
        outputs = []
        try:
            with torch.no_grad():
                for start in range(0, len(x), batch_size):
                    chunk = torch.from_numpy(x[start:start + batch_size]).to(self.device)
                    outputs.append(self.model(chunk).reshape(-1).to('cpu'))
        except RuntimeError as e:
            raise CostOracleError("Cost model inference failed") from e

        costs = torch.cat(outputs)
        if len(costs) != len(x):
            raise CostOracleError(f"Cost model returned {len(costs)} values for {len(x)} states")
        return costs.tolist()


@gin.configurable
class HammingCostEstimator:
    """
    Model-free estimate: the number of stickers differing from the closest
    solved orientation, divided by `scale`.
    """

    def __init__(self, scale=8.):
        self.scale = scale

    def construct_networks(self):
        pass

    def estimate(self, batch, batch_size=None):
        states = np.asarray(batch).reshape(-1, N_STICKERS)
        mismatches = (states[:, np.newaxis, :] != GOAL_STATES[np.newaxis]).sum(axis=2).min(axis=1)
        return (mismatches / self.scale).tolist()
