# roster/io - Input/output handling
from .loader import load_people_csv, load_request, parse_request
from .results_export import export_result_json, result_payload

__all__ = ["load_request", "parse_request", "load_people_csv", "export_result_json", "result_payload"]
