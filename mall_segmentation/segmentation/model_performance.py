"""
Reference clustering-quality curves.

Elbow (SSE) and silhouette scores by cluster count from the offline K-Means
analysis of the mall dataset. Display only; never recomputed.
"""

from mall_segmentation.models.customer import ElbowPoint, ModelPerformance, SilhouettePoint

ELBOW_CURVE = (
    (1, 500), (2, 350), (3, 200), (4, 120), (5, 80),
    (6, 65), (7, 58), (8, 55), (9, 52), (10, 50),
)

SILHOUETTE_CURVE = (
    (2, 0.45), (3, 0.52), (4, 0.48), (5, 0.55), (6, 0.42),
    (7, 0.38), (8, 0.35), (9, 0.33), (10, 0.30),
)

CHOSEN_K = 5


def reference_model_performance() -> ModelPerformance:
    return ModelPerformance(
        elbow_data=[ElbowPoint(k=k, sse=sse) for k, sse in ELBOW_CURVE],
        silhouette_data=[SilhouettePoint(k=k, score=score) for k, score in SILHOUETTE_CURVE],
    )
