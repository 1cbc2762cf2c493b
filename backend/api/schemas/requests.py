"""
Request schemas for the API.

Multipart endpoints (parse-roster, parse-topics, merge) take form fields;
only export takes a JSON body.
"""

from typing import Optional

from pydantic import BaseModel, Field

from roster_merge.models import MergedRow


class ExportRequest(BaseModel):
    """Rows to export, usually after human review."""
    rows: Optional[list[MergedRow]] = Field(
        default=None, description="Merged rows in display order"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rows": [
                        {
                            "name": "陳大文",
                            "title": "物理治療師",
                            "seniority": "3~5年",
                            "question": "請問這個怎麼用？",
                            "date": "2025/03/05",
                            "topic": "開場介紹",
                            "matchScore": 1.0,
                        }
                    ]
                }
            ]
        }
    }
