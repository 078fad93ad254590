"""
Core point synthesis and coincidence resolution.
"""

from .point import Point, Status, InvalidArgument, STATUS_VALUES
from .synthesizer import (
    BoundingBox, MURCIA_BOUNDS, PointSynthesizer, SynthesizerOptions,
    synthesize, synthesize_with_duplicates,
)
from .coincidence import (
    CoincidenceResolver, ResolverOptions, centroid, detect_duplicates,
    exact_key, grid_key, group_coincident, jitter, resolve_coincident, spiderfy,
)
from .filtering import StatusFilter, filter_by_status, search_stations, to_feature, to_feature_collection

__all__ = ['Point', 'Status', 'InvalidArgument', 'STATUS_VALUES',
           'BoundingBox', 'MURCIA_BOUNDS', 'PointSynthesizer', 'SynthesizerOptions',
           'synthesize', 'synthesize_with_duplicates',
           'CoincidenceResolver', 'ResolverOptions', 'centroid', 'detect_duplicates',
           'exact_key', 'grid_key', 'group_coincident', 'jitter', 'resolve_coincident', 'spiderfy',
           'StatusFilter', 'filter_by_status', 'search_stations', 'to_feature', 'to_feature_collection']
