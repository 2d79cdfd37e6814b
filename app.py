#!/usr/bin/env python3
"""CDK app for RDS Tag Setter Lambda."""

import os
import datetime
import subprocess
import aws_cdk as cdk
from stacks.rds_tag_setter_stack import RDSTagSetterStack


def git_commit() -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], text=True
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "none"


app = cdk.App()

RDSTagSetterStack(
    app,
    app.node.try_get_context("stack_name") or "RDSTagSetterStack",
    git_commit=app.node.try_get_context("git_commit") or git_commit(),
    build_time=datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    description="Tags Aurora read replicas created by application autoscaling",
    env=cdk.Environment(
        account=os.getenv('CDK_DEFAULT_ACCOUNT'),
        region=os.getenv('CDK_DEFAULT_REGION', 'us-east-1')
    ),
    tags={
        "Project": "PlatformEngineering",
        "ManagedBy": "CDK",
        "iit-billing-tag": "rds-tag-setter"
    }
)

app.synth()
