#!/usr/bin/env python3
"""
Tree-sitter Java API Indexer (Python)
-------------------------------------
Indexes a Java code base into an in-memory model of its API surface:
- classes and interfaces by fully qualified name (FQCN) and by simple name
- annotations and fields of each class
- every method carrying a routing annotation (@GetMapping, @RequestMapping, ...)
  with its declaration, parameters, Javadoc, body and response type

USAGE EXAMPLES
--------------
# 1) Run against a bundled sample project:
python -m api_index.src.api_index.main

# 2) Run against a directory of .java files (recursive):
python -m api_index.src.api_index.main /path/to/java/project

DEPENDENCIES
------------
    pip install tree-sitter tree-sitter-java

Settings come from API_INDEX_* environment variables (see config.py).
"""

import logging
import sys
import tempfile
from pathlib import Path

from api_index.src.api_index.config import IndexerConfig
from api_index.src.api_index.errors import IndexerError
from api_index.src.api_index.indexer import ApiIndexer
from api_index.src.api_index.outputs.output import print_summary, to_json

# --- Demo main ---------------------------------------------------------------

SAMPLE_FILES = {
    "src/main/java/com/acme/demo/web/UserController.java": r"""
package com.acme.demo.web;

import com.acme.demo.model.User;
import org.springframework.http.ResponseEntity;
import org.springframework.web.bind.annotation.*;

@RestController
@RequestMapping("/users")
public class UserController {
    private final UserRepository repo = new UserRepository();

    /**
     * Looks a user up by id.
     * @param id the user id
     */
    @GetMapping("/{id}")
    public ResponseEntity<User> getUser(@PathVariable Long id) {
        return ResponseEntity.ok(repo.find(id));
    }

    @PostMapping
    public User addUser(@RequestBody User user) {
        repo.save(user);
        return user;
    }

    public void notAnEndpoint() {
    }
}
""",
    "src/main/java/com/acme/demo/model/User.java": r"""
package com.acme.demo.model;

public class User {
    private Long id;
    private String name;
}
""",
}


def write_sample_project(target: Path) -> Path:
    for relative, source in SAMPLE_FILES.items():
        path = target / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source.lstrip(), encoding="utf-8")
    return target


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = IndexerConfig.from_env()
    except IndexerError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    indexer = ApiIndexer(config)

    # If a directory is given, index it; else index the bundled sample
    if argv:
        index = indexer.load(argv[0])
    else:
        with tempfile.TemporaryDirectory() as tmp:
            index = indexer.load(write_sample_project(Path(tmp)))

    if index is None:
        return 1

    # Print a concise human-readable summary
    print_summary(index)

    # Also print JSON for the documentation generator
    print("\n=== JSON ===")
    print(to_json(index))
    return 0


if __name__ == "__main__":
    sys.exit(main())
