"""POST /v1/classify - Resolve free-text interest to an official category"""

from fastapi import APIRouter, Depends, Request

from motofin_gateway.api.v1.schemas import ClassifyRequest, ClassifyResponse, ClassificationSchema
from motofin_gateway.api.dependencies import get_classifier, get_request_id
from motofin_gateway.domain.classification import CategoryClassifier
from motofin_gateway.infrastructure.observability.metrics import record_classification
from motofin_gateway.infrastructure.observability.logging import log_classification

router = APIRouter()


@router.post("/classify", response_model=ClassifyResponse)
def classify_interest(
    request_body: ClassifyRequest,
    request: Request,
    classifier: CategoryClassifier = Depends(get_classifier),
):
    """
    Classify a buyer's wording ("pistera", "scoter") against the taxonomy.

    An unrecognized query is not an error: the response carries `match: null`.
    """
    result = classifier.classify(request_body.query)

    method = result.method.value if result else None
    record_classification(method)
    log_classification(get_request_id(request), request_body.query, result.category if result else None, method)

    if result is None:
        return ClassifyResponse(match=None)

    return ClassifyResponse(
        match=ClassificationSchema(category=result.category, score=result.score, method=method)
    )
