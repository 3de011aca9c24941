from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from schema.base import GenericResponseModel

from context_manager.context import context_user_data
from utils.exceptions import ConfigurationError, RateCalculationError

from logger import logger


# build a proper api response from the Generic response sent to it
def build_api_response(generic_response: GenericResponseModel) -> JSONResponse:
    try:
        response_json = jsonable_encoder(generic_response)

        # Remove the status_code key if it exists
        response_json.pop("status_code", None)

        res = JSONResponse(
            status_code=generic_response.status_code, content=response_json
        )

        logger.info(
            extra=context_user_data.get(),
            msg="build_api_response: Generated Response with status_code:"
            + f"{generic_response.status_code}",
        )
        return res

    except Exception as e:
        logger.error(
            extra=context_user_data.get(),
            msg=f"Exception in build_api_response error : {e}",
        )

        return JSONResponse(status_code=generic_response.status_code, content=str(e))


# map a typed rate engine failure to the generic response shape
def build_error_response(exc: RateCalculationError) -> JSONResponse:
    if isinstance(exc, ConfigurationError):
        # bad reference data, needs an admin; surfaced for alerting
        logger.error(
            extra=context_user_data.get(),
            msg=f"ConfigurationError: {exc.message} {exc.details}",
        )
    else:
        logger.info(
            extra=context_user_data.get(),
            msg=f"{exc.code}: {exc.message}",
        )

    return build_api_response(
        GenericResponseModel(
            status_code=int(exc.status_code),
            status=False,
            message=exc.message,
            data=exc.to_dict(),
        )
    )
