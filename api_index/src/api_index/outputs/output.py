import json

from api_index.src.api_index.models.api_index import ApiIndex


# --- Pretty printing & JSON export ------------------------------------------

def print_summary(index: ApiIndex):
    """
    Human-friendly printout of what we found.
    """
    print("\n=== CLASSES & API METHODS ===")
    for fqcn, cr in sorted(index.classes.items(), key=lambda kv: kv[0]):
        class_annotations = " ".join(str(a) for a in cr.annotations)
        print(f"\n[{fqcn}]  {class_annotations}".rstrip())
        for f in cr.fields:
            print(f"  field {f.type} {f.name}")
        for mr in cr.methods.values():
            annotations = " ".join(str(a) for a in mr.annotations)
            response = f" -> {mr.response_qualified_name or mr.response_type}" if mr.response_type else ""
            print(f"  - {mr.declaration}{response}  @ {mr.line + 1}")
            if annotations:
                print(f"      {annotations}")

    print("\n=== SIMPLE NAMES ===")
    for name, fqcns in sorted(index.names.items()):
        print(f" - {name}: {', '.join(fqcns)}")


def _annotation_json(annotation):
    return {"name": annotation.name, "arguments": annotation.arguments}


def to_json(index: ApiIndex) -> str:
    """
    Serializes the index to JSON for whatever renders the documentation.
    """
    out = {
        "classes": [],
        "names": index.names,
    }
    for fqcn, cr in index.classes.items():
        out["classes"].append({
            "fqcn": fqcn,
            "simpleName": cr.simple_name,
            "kind": cr.kind,
            "file": cr.file_path,
            "annotations": [_annotation_json(a) for a in cr.annotations],
            "fields": [{"name": f.name, "type": f.type} for f in cr.fields],
            "methods": [
                {
                    "name": mr.simple_name,
                    "declaration": mr.declaration,
                    "params": [
                        {
                            "name": p.name,
                            "type": p.type,
                            "annotations": [_annotation_json(a) for a in p.annotations],
                        } for p in mr.parameters
                    ],
                    "comment": mr.comment,
                    "annotations": [_annotation_json(a) for a in mr.annotations],
                    "responseType": mr.response_type,
                    "responseQualifiedName": mr.response_qualified_name,
                    "body": mr.body,
                    "line": mr.line,
                }
                for mr in cr.methods.values()
            ]
        })
    return json.dumps(out, indent=2)
