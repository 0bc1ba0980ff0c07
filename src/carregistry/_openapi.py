"""OpenAPI document and Swagger UI page served under the docs route."""

from __future__ import annotations

from typing import Any

from carregistry.config import RegistryConfig
from carregistry.models.car import Car

_SWAGGER_UI_VERSION = "5"

_REF_TEMPLATE = "#/components/schemas/{model}"
_CAR_REF = {"$ref": "#/components/schemas/Car"}
_NULL_SCHEMA = {"type": "null"}


def _id_parameter() -> dict[str, Any]:
    return {
        "in": "path",
        "name": "id",
        "required": True,
        "schema": {"type": "string"},
        "description": "ID do carro",
    }


def _json_body(schema: dict[str, Any]) -> dict[str, Any]:
    return {"required": True, "content": {"application/json": {"schema": schema}}}


def _nullable_to_openapi30(node: Any) -> Any:
    """Rewrite JSON Schema ``anyOf: [X, {type: null}]`` into OpenAPI 3.0 ``nullable``."""
    if isinstance(node, list):
        return [_nullable_to_openapi30(item) for item in node]
    if not isinstance(node, dict):
        return node
    converted = {key: _nullable_to_openapi30(value) for key, value in node.items()}
    variants = converted.get("anyOf")
    if not isinstance(variants, list) or _NULL_SCHEMA not in variants:
        return converted
    rest = [variant for variant in variants if variant != _NULL_SCHEMA]
    del converted["anyOf"]
    if len(rest) == 1 and "$ref" in rest[0]:
        # Siblings of $ref are ignored in 3.0.
        converted["allOf"] = rest
    elif len(rest) == 1:
        converted.update(rest[0])
    else:
        converted["anyOf"] = rest
    converted["nullable"] = True
    return converted


def build_component_schemas() -> dict[str, Any]:
    schema = _nullable_to_openapi30(Car.model_json_schema(by_alias=True, ref_template=_REF_TEMPLATE))
    components: dict[str, Any] = dict(schema.pop("$defs", {}))
    components["Car"] = schema
    return components


def build_openapi(config: RegistryConfig) -> dict[str, Any]:
    """Build the OpenAPI 3.0 document describing the car routes."""
    collection = config.base_path
    item = f"{collection}/{{id}}"
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "API de Carros",
            "version": "1.0.0",
            "description": "API para gerenciar dados de carros.",
        },
        "servers": [{"url": config.base_url, "description": "Servidor local"}],
        "components": {"schemas": build_component_schemas()},
        "paths": {
            collection: {
                "post": {
                    "summary": "Adiciona um novo carro ou uma lista de carros",
                    "requestBody": _json_body({"oneOf": [_CAR_REF, {"type": "array", "items": _CAR_REF}]}),
                    "responses": {
                        "201": {"description": "Carro(s) adicionado(s) com sucesso"},
                        "400": {"description": "Erro de validação nos dados fornecidos"},
                    },
                },
                "get": {
                    "summary": "Retorna a lista de todos os carros",
                    "responses": {
                        "200": {
                            "description": "Lista de carros retornada com sucesso",
                            "content": {"application/json": {"schema": {"type": "array", "items": _CAR_REF}}},
                        }
                    },
                },
            },
            item: {
                "get": {
                    "summary": "Retorna os dados de um carro específico",
                    "parameters": [_id_parameter()],
                    "responses": {
                        "200": {"description": "Dados do carro retornados com sucesso"},
                        "404": {"description": "Carro não encontrado"},
                    },
                },
                "patch": {
                    "summary": "Atualiza os dados de um carro específico",
                    "parameters": [_id_parameter()],
                    "requestBody": _json_body(_CAR_REF),
                    "responses": {
                        "201": {"description": "Carro atualizado com sucesso"},
                        "400": {"description": "Erro de validação nos dados fornecidos"},
                        "404": {"description": "Carro não encontrado"},
                    },
                },
                "delete": {
                    "summary": "Remove um carro específico",
                    "parameters": [_id_parameter()],
                    "responses": {
                        "200": {"description": "Carro deletado com sucesso"},
                        "404": {"description": "Carro não encontrado"},
                    },
                },
            },
        },
    }


def render_swagger_ui(document_url: str, *, title: str = "API de Carros") -> str:
    """Return a standalone Swagger UI page loading the document at *document_url*."""
    cdn = f"https://unpkg.com/swagger-ui-dist@{_SWAGGER_UI_VERSION}"
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
  <link rel="stylesheet" href="{cdn}/swagger-ui.css" />
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="{cdn}/swagger-ui-bundle.js"></script>
  <script>
    window.onload = () => {{
      window.ui = SwaggerUIBundle({{ url: "{document_url}", dom_id: "#swagger-ui" }});
    }};
  </script>
</body>
</html>
"""
