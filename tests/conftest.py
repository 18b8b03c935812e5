"""Global test configuration for ragchunk tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """CLI tests configure logging onto captured streams; undo it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def knowledge_doc():
    return """Preamble before any heading.

# Overview

The service executes work orders.

## Setup

Install the agent and register it.

```bash
# not a heading, just a shell comment
agent register --token abc
```

## Usage

Run the agent.
"""


@pytest.fixture
def typescript_module():
    return '''import { readFile } from "fs/promises";
import type { Config } from "./config";

/**
 * A user of the system.
 */
export interface User {
  id: string;
  name: string;
}

// Identifier alias
type UserId = string;

const handler = async (id: UserId) => readFile(id, "utf-8");
const retries = 3;

export class UserRepo {
  find(id: UserId): User | undefined {
    return undefined;
  }
}
'''
