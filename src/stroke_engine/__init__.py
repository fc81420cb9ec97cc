"""StrokeEngine - pointer gesture matching via key points and DTW."""

__version__ = "0.1.0"

from stroke_engine.geometry import Point, Vector, as_points, angle_difference
from stroke_engine.simplify import simplify_trajectory
from stroke_engine.keypoints import KeyPointOptions, extract_key_points, simplify_key_points
from stroke_engine.features import TrajectoryFeatures, extract_features, normalize_trajectory
from stroke_engine.dtw import dtw_similarity
from stroke_engine.shape import compare_shapes
from stroke_engine.matcher import MatchOptions, MatchResult, match_trajectories
from stroke_engine.config import load_options, save_options
from stroke_engine.library import GestureLibrary, GestureMatch, GestureTemplate
from stroke_engine.buffer import StrokeBuffer
