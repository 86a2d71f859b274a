"""
Synthetic motor-intent signal generator.

Turns a motion intent (start pose → end pose) into a batch of 12-channel
integer signals, one row per simulated trial. Two strategies:

    1. Cluster activation  → channels grouped into physiological clusters
                             share a random, strength-weighted activation
    2. Trajectory noise    → position channels follow linear interpolation
                             between the poses plus gaussian/uniform noise

Trajectory channel layout:
    0-2  — noisy x, y, z at the final time step          (× POSITION_SCALE)
    3-5  — noise-free x, y, z at the final time step     (× POSITION_SCALE)
    6-11 — start-pose orientation baseline, carried over unchanged
"""

import math
from enum import Enum

import numpy as np

from .errors import InvalidArgument, InvalidDuration
from .constants import N_CHANNELS, POSITION_SCALE
from .KinematicPose import KinematicPose
from .ClusterLayout import ClusterLayout

# -------------------------------------------------------------------
# Generation parameters
# -------------------------------------------------------------------
DEFAULT_SAMPLE_PERIOD = 1.0
DEFAULT_NUM_SIGNALS = 1024

CLAMP_MIN = 0
CLAMP_MAX = 200
NOISE_PROBABILITY = 0.1   # chance per channel of a noise kick (cluster mode)
NOISE_RANGE = 25.0        # noise kick drawn from [-NOISE_RANGE, +NOISE_RANGE]

N_BASELINE = 6            # orientation-derived baseline values per signal

# Trajectory noise is drawn this many time steps at a time
NOISE_CHUNK_STEPS = 64

# Tolerance when stepping t up to end.duration in sample_period increments
_STEP_EPS = 1e-9

# Scaled values must stay strictly below 2**63 to fit an int64 channel
_INT64_LIMIT = float(np.iinfo(np.int64).max)


class NoiseType(Enum):
    """Noise model used by trajectory mode."""
    GAUSSIAN = "gaussian"
    UNIFORM = "uniform"

    @classmethod
    def parse(cls, value) -> "NoiseType":
        """Accept a NoiseType member or its name ("gaussian", "UNIFORM", ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(m.value for m in cls)
        raise InvalidArgument(f"Unknown noise type {value!r} (expected one of: {choices}).")


def _to_int64(values: np.ndarray, what: str = "channel value") -> np.ndarray:
    """Cast already-rounded floats to int64, refusing anything that would wrap."""
    values = np.asarray(values, dtype=np.float64)
    if not np.all(np.abs(values) < _INT64_LIMIT):
        raise InvalidArgument(
            f"Scaled {what} does not fit an int64 channel "
            f"(|value| must be < {_INT64_LIMIT:.3e})."
        )
    return values.astype(np.int64)


def _round(values: np.ndarray) -> np.ndarray:
    """Round half away from zero and cast to int64."""
    values = np.asarray(values, dtype=np.float64)
    return _to_int64(np.sign(values) * np.floor(np.abs(values) + 0.5))


class SignalSynthesizer:
    """Generate batches of synthetic 12-channel neural signals."""

    def __init__(
        self,
        sample_period: float = DEFAULT_SAMPLE_PERIOD,
        seed: int | None = None,
        layout: ClusterLayout | None = None,
        verbose: bool = False,
    ):
        """
        Args:
            sample_period: Time between trajectory samples (same unit as pose duration).
            seed:          Seed for the private random generator (None = fresh entropy).
            layout:        Channel → cluster partition (default: 4/3/2/2/1 layout).
            verbose:       Print a one-line summary after each generation call.
        """
        try:
            sample_period = float(sample_period)
        except (TypeError, ValueError):
            raise InvalidArgument(f"sample_period must be numeric, got {sample_period!r}.") from None
        if not math.isfinite(sample_period) or sample_period <= 0:
            raise InvalidArgument(f"sample_period must be > 0, got {sample_period}.")

        self.sample_period = sample_period
        self.layout = layout if layout is not None else ClusterLayout.default()
        if self.layout.n_channels != N_CHANNELS:
            raise InvalidArgument(
                f"Cluster layout covers {self.layout.n_channels} channels, expected {N_CHANNELS}."
            )
        self.verbose = verbose
        self.rng = np.random.default_rng(seed)

    def reseed(self, seed: int | None = None) -> None:
        """Replace the private random generator with a freshly seeded one."""
        self.rng = np.random.default_rng(seed)

    # ─── Cluster-activation mode ─────────────────────────────────────
    def generate_cluster_signals(
        self,
        start,
        end,
        num_signals: int = DEFAULT_NUM_SIGNALS,
        cluster_strength: float = 0.5,
        *,
        noise_probability: float = NOISE_PROBABILITY,
        noise_range: float = NOISE_RANGE,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Generate signals whose channels follow a shared per-cluster activation.

        For every signal and cluster, activation = sin(u1)² · s + cos(u2)² · (1 − s)
        with u1, u2 ~ U(0, 1) and s = cluster_strength. This is a heuristic
        blend, not a probability law. Each channel then gets
        round(activation · (u3 · 100 + 50)), is clamped to [0, 200], and with
        probability noise_probability receives a U(−noise_range, +noise_range)
        kick. The kick is applied after clamping, so values may end up in
        [−25, 225] with the default range.

        Poses are validated but do not influence the activation.

        Args:
            start, end:        KinematicPose (or 8-element sequences).
            num_signals:       Number of signals to generate (> 0).
            cluster_strength:  Weight of the sin² term, conventionally in [0, 1].
            noise_probability: Per-channel chance of a noise kick, in [0, 1].
            noise_range:       Half-width of the noise kick (>= 0).
            rng:               Optional generator used instead of the private one.

        Returns:
            np.ndarray of shape (num_signals, 12), dtype int64.
        """
        KinematicPose.coerce(start)
        KinematicPose.coerce(end)
        self._check_num_signals(num_signals)
        cluster_strength = self._check_finite("cluster_strength", cluster_strength)
        noise_probability = self._check_finite("noise_probability", noise_probability)
        if not 0.0 <= noise_probability <= 1.0:
            raise InvalidArgument(f"noise_probability must be in [0, 1], got {noise_probability}.")
        noise_range = self._check_finite("noise_range", noise_range)
        if noise_range < 0:
            raise InvalidArgument(f"noise_range must be >= 0, got {noise_range}.")

        rng = rng if rng is not None else self.rng
        n_clusters = len(self.layout)

        # Step 1: one activation per (signal, cluster)
        u1 = rng.random((num_signals, n_clusters))
        u2 = rng.random((num_signals, n_clusters))
        activation = (np.sin(u1) ** 2 * cluster_strength
                      + np.cos(u2) ** 2 * (1.0 - cluster_strength))

        # Step 2: broadcast to channels, scale to ~[0, 150]
        u3 = rng.random((num_signals, N_CHANNELS))
        channel_activation = activation[:, self.layout.channel_cluster]
        signals = _round(channel_activation * (u3 * 100.0 + 50.0))

        # Step 3: clamp
        signals = np.clip(signals, CLAMP_MIN, CLAMP_MAX)

        # Step 4: sparse noise kicks on top of the clamped values
        kick_mask = rng.random((num_signals, N_CHANNELS)) < noise_probability
        kicks = _round(rng.random((num_signals, N_CHANNELS)) * 2.0 * noise_range - noise_range)
        signals = signals + np.where(kick_mask, kicks, 0)

        if self.verbose:
            print(f"Cluster signals: {num_signals:,} x {N_CHANNELS} channels "
                  f"(strength={cluster_strength:.2f}, {int(kick_mask.sum()):,} noise kicks), "
                  f"range [{signals.min()}, {signals.max()}]")
        return signals

    # ─── Trajectory-noise mode ───────────────────────────────────────
    def generate_trajectory_signals(
        self,
        start,
        end,
        num_signals: int = DEFAULT_NUM_SIGNALS,
        noise_type=NoiseType.GAUSSIAN,
        noise_amplitude: float = 1.0,
        *,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Generate one terminal-state signal per trial by following the trajectory.

        Only the final time step of each trial is returned; use
        generate_trajectory_series() to keep every step. When the time grid
        is empty (end.duration < sample_period) the orientation baseline is
        returned unchanged.

        Noise for the earlier steps is still drawn, chunk by chunk, so the
        result matches the last step of generate_trajectory_series() under
        the same seed while memory stays at one chunk.

        Returns:
            np.ndarray of shape (num_signals, 12), dtype int64.
        """
        start, end, noise_type, noise_amplitude, n_samples, n_steps, baseline, rng = \
            self._prepare_trajectory(start, end, num_signals, noise_type, noise_amplitude, rng)

        signals = np.tile(baseline, (num_signals, 1))
        if n_steps > 0:
            last_noise = None
            for _, noise in self._noise_chunks(rng, noise_type, noise_amplitude,
                                               num_signals, n_steps):
                last_noise = noise[:, -1, :].copy()

            coords = self._interpolate(start, end, n_samples,
                                       np.array([n_steps * self.sample_period]))[0]
            signals[:, 0:3] = _round((coords + last_noise) * POSITION_SCALE)
            signals[:, 3:6] = _round(coords * POSITION_SCALE)

        if self.verbose:
            print(f"Trajectory signals: {num_signals:,} x {N_CHANNELS} channels "
                  f"({n_steps} steps, {noise_type.value} noise a={noise_amplitude}), "
                  f"range [{signals.min()}, {signals.max()}]")
        return signals

    def generate_trajectory_series(
        self,
        start,
        end,
        num_signals: int = DEFAULT_NUM_SIGNALS,
        noise_type=NoiseType.GAUSSIAN,
        noise_amplitude: float = 1.0,
        *,
        rng: np.random.Generator | None = None,
    ) -> np.ndarray:
        """Same as generate_trajectory_signals() but keeps every time step.

        Returns:
            np.ndarray of shape (num_signals, n_steps, 12), dtype int64, where
            n_steps = len(self.time_steps(end)).
        """
        start, end, noise_type, noise_amplitude, n_samples, n_steps, baseline, rng = \
            self._prepare_trajectory(start, end, num_signals, noise_type, noise_amplitude, rng)

        series = np.tile(baseline, (num_signals, n_steps, 1))
        if n_steps > 0:
            # (n_steps, 3) interpolated positions, shared by every trial
            coords = self._interpolate(start, end, n_samples, self.time_steps(end))
            series[:, :, 3:6] = _round(coords * POSITION_SCALE)
            for first, noise in self._noise_chunks(rng, noise_type, noise_amplitude,
                                                   num_signals, n_steps):
                stop = first + noise.shape[1]
                series[:, first:stop, 0:3] = _round(
                    (coords[first:stop] + noise) * POSITION_SCALE)

        if self.verbose:
            print(f"Trajectory series: {num_signals:,} trials x {n_steps} steps "
                  f"x {N_CHANNELS} channels")
        return series

    def num_samples(self, start, end) -> int:
        """Number of samples spanned by the poses: floor(Δduration / period) + 1.

        Raises:
            InvalidDuration: if end.duration <= start.duration.
        """
        start = KinematicPose.coerce(start)
        end = KinematicPose.coerce(end)
        if end.duration <= start.duration:
            raise InvalidDuration(
                f"end.duration ({end.duration}) must be greater than "
                f"start.duration ({start.duration})."
            )
        return math.floor((end.duration - start.duration) / self.sample_period) + 1

    def time_steps(self, end) -> np.ndarray:
        """Time grid t = period, 2·period, ... up to end.duration inclusive."""
        n_steps = self._step_count(end)
        return np.arange(1, n_steps + 1, dtype=np.float64) * self.sample_period

    def _step_count(self, end) -> int:
        end = KinematicPose.coerce(end)
        return max(0, math.floor(end.duration / self.sample_period + _STEP_EPS))

    def _prepare_trajectory(self, start, end, num_signals, noise_type, noise_amplitude, rng):
        """Validate trajectory inputs; everything that can fail fails here."""
        start = KinematicPose.coerce(start)
        end = KinematicPose.coerce(end)
        self._check_num_signals(num_signals)
        noise_type = NoiseType.parse(noise_type)
        noise_amplitude = self._check_finite("noise_amplitude", noise_amplitude)
        if noise_amplitude < 0:
            raise InvalidArgument(f"noise_amplitude must be >= 0, got {noise_amplitude}.")
        n_samples = self.num_samples(start, end)
        n_steps = self._step_count(end)
        baseline = self._orientation_baseline(start)

        if n_steps > 0:
            # positions are linear in t, so the first and last steps bound them
            edges = self._interpolate(start, end, n_samples,
                                      np.array([1.0, n_steps]) * self.sample_period)
            bound = (np.abs(edges).max() + noise_amplitude) * POSITION_SCALE
            if not bound < _INT64_LIMIT:
                raise InvalidArgument(
                    f"Trajectory positions plus noise reach {bound:.3e} channel units, "
                    f"beyond the int64 range."
                )

        rng = rng if rng is not None else self.rng
        return start, end, noise_type, noise_amplitude, n_samples, n_steps, baseline, rng

    @staticmethod
    def _interpolate(start: KinematicPose, end: KinematicPose, n_samples: int,
                     steps: np.ndarray) -> np.ndarray:
        """(len(steps), 3) positions at start + (end - start) · t / n_samples."""
        frac = steps / n_samples
        return start.position + np.outer(frac, end.position - start.position)

    @staticmethod
    def _orientation_baseline(start: KinematicPose) -> np.ndarray:
        """Truncated roll/pitch/yaw/duration/flag of the start pose, padded to 6,
        written to channels 0-5 and mirrored into channels 6-11."""
        values = np.zeros(N_BASELINE, dtype=np.int64)
        fields = start.as_array()[3:]
        values[:len(fields)] = _to_int64(np.trunc(fields * POSITION_SCALE),
                                         "start-pose orientation")

        baseline = np.zeros(N_CHANNELS, dtype=np.int64)
        baseline[0:N_BASELINE] = values
        baseline[N_BASELINE:2 * N_BASELINE] = values
        return baseline

    def _noise_chunks(self, rng, noise_type: NoiseType, amplitude: float,
                      num_signals: int, n_steps: int):
        """Yield (first_step, noise) with noise shaped (num_signals, chunk, 3).

        Draws are step-major, so splitting into chunks leaves the stream unchanged.
        """
        for first in range(0, n_steps, NOISE_CHUNK_STEPS):
            count = min(NOISE_CHUNK_STEPS, n_steps - first)
            noise = self._draw_noise(rng, noise_type, amplitude, (count, num_signals, 3))
            yield first, noise.transpose(1, 0, 2)

    @staticmethod
    def _draw_noise(rng, noise_type: NoiseType, amplitude: float, shape) -> np.ndarray:
        if noise_type is NoiseType.GAUSSIAN:
            return rng.normal(0.0, amplitude, size=shape)
        return rng.uniform(-amplitude, amplitude, size=shape)

    # ─── Validation helpers ──────────────────────────────────────────
    @staticmethod
    def _check_num_signals(num_signals) -> None:
        if isinstance(num_signals, bool) or not isinstance(num_signals, (int, np.integer)):
            raise InvalidArgument(f"num_signals must be an integer, got {num_signals!r}.")
        if num_signals <= 0:
            raise InvalidArgument(f"num_signals must be > 0, got {num_signals}.")

    @staticmethod
    def _check_finite(name: str, value) -> float:
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidArgument(f"{name} must be numeric, got {value!r}.") from None
        if not math.isfinite(value):
            raise InvalidArgument(f"{name} must be finite, got {value}.")
        return value

    # ─── Reporting ───────────────────────────────────────────────────
    @staticmethod
    def get_batch_info(batch: np.ndarray) -> dict:
        """Summary statistics for a signal batch (2-D) or series (3-D).

        Returns:
            dict with num_signals, n_channels, channel_means, channel_stds,
            min_value and max_value.
        """
        batch = np.asarray(batch)
        if batch.ndim not in (2, 3) or batch.shape[-1] != N_CHANNELS:
            raise InvalidArgument(
                f"Expected shape (n, {N_CHANNELS}) or (n, steps, {N_CHANNELS}), got {batch.shape}."
            )
        flat = batch.reshape(-1, N_CHANNELS)
        if flat.shape[0] == 0:
            raise InvalidArgument("Batch contains no samples.")
        return {
            'num_signals': int(batch.shape[0]),
            'n_channels': N_CHANNELS,
            'channel_means': flat.mean(axis=0),
            'channel_stds': flat.std(axis=0),
            'min_value': int(flat.min()),
            'max_value': int(flat.max()),
        }
