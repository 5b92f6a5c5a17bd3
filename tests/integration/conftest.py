"""Shared fixtures for rbiam integration tests.

Provides an access graph modelled on an EKS cluster running an
IRSA-enabled workload next to one that relies on its node's role.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rbiam.graph.persistence import dump
from rbiam.graph.store import AccessGraph
from rbiam.models.entities import Container, EnvVar, Pod, Policy, Role, Secret, ServiceAccount

ECHOER_ROLE = "arn:aws:iam::123456789012:role/s3-echoer"
NODE_ROLE = "arn:aws:iam::123456789012:role/eksctl-demo-nodegroup-NodeInstanceRole"
S3_POLICY = "arn:aws:iam::aws:policy/AmazonS3FullAccess"

# ---------------------------------------------------------------------------
# Entity factories
# ---------------------------------------------------------------------------


def make_irsa_pod(name: str = "s3-echoer-8jq2n", namespace: str = "default") -> Pod:
    """Pod whose service account is annotated for IRSA."""
    return Pod(
        name=name,
        namespace=namespace,
        service_account_name="s3-echoer",
        node_name="ip-192-168-12-7.eu-west-1.compute.internal",
        host_ip="192.168.12.7",
        containers=[
            Container(
                name="s3-echoer",
                image="quay.io/mhausenblas/s3-echoer:1.0",
                env=[
                    EnvVar("AWS_DEFAULT_REGION", "eu-west-1"),
                    EnvVar("AWS_ROLE_ARN", ECHOER_ROLE),
                    EnvVar("AWS_WEB_IDENTITY_TOKEN_FILE", "/var/run/secrets/eks.amazonaws.com/serviceaccount/token"),
                ],
            )
        ],
    )


def make_node_role_pod(name: str = "aws-node-x7k2p", namespace: str = "kube-system") -> Pod:
    """Pod that gets its AWS credentials from the node's instance profile."""
    return Pod(
        name=name,
        namespace=namespace,
        service_account_name="aws-node",
        node_name="ip-192-168-12-7.eu-west-1.compute.internal",
        host_ip="192.168.12.7",
        containers=[Container(name="aws-node", image="amazon-k8s-cni:v1.5.0")],
    )


@pytest.fixture
def access_graph() -> AccessGraph:
    graph = AccessGraph()
    graph.add(make_irsa_pod())
    graph.add(make_node_role_pod())
    graph.add(
        ServiceAccount(
            name="s3-echoer",
            namespace="default",
            secrets=["s3-echoer-token-5zvnl"],
            annotations={"eks.amazonaws.com/role-arn": ECHOER_ROLE},
        )
    )
    graph.add(ServiceAccount(name="aws-node", namespace="kube-system", secrets=["aws-node-token-2lk9c"]))
    graph.add(Secret(name="s3-echoer-token-5zvnl", namespace="default", type="kubernetes.io/service-account-token"))
    graph.add(Secret(name="aws-node-token-2lk9c", namespace="kube-system", type="kubernetes.io/service-account-token"))
    graph.add(
        Role(
            arn=ECHOER_ROLE,
            name="s3-echoer",
            role_id="AROAEXAMPLE1",
            assume_role_policy_document={
                "Version": "2012-10-17",
                "Statement": [{"Effect": "Allow", "Action": "sts:AssumeRoleWithWebIdentity"}],
            },
        )
    )
    graph.add(Role(arn=NODE_ROLE, name="eksctl-demo-nodegroup-NodeInstanceRole", role_id="AROAEXAMPLE2"))
    graph.add(Policy(arn=S3_POLICY, name="AmazonS3FullAccess", policy_id="ANPAEXAMPLE", attachment_count=1))
    return graph


@pytest.fixture
def trace() -> list[str]:
    """Trace of a traversal starting at the s3-echoer pod."""
    return [
        "[Kubernetes pod] default:s3-echoer-8jq2n",
        "[Kubernetes service account] default:s3-echoer",
        "[Kubernetes secret] default:s3-echoer-token-5zvnl",
        f"[IAM role] {ECHOER_ROLE}",
        f"[IAM policy] {S3_POLICY}",
        "[Kubernetes pod] kube-system:aws-node-x7k2p",
        f"[IAM role] {NODE_ROLE}",
        "[Kubernetes pod] default:s3-echoer-8jq2n",
    ]


@pytest.fixture
def dump_file(access_graph: AccessGraph, tmp_path: Path) -> Path:
    return dump(access_graph, tmp_path, now=1564315000)


@pytest.fixture
def trace_file(trace: list[str], tmp_path: Path) -> Path:
    path = tmp_path / "trace.txt"
    path.write_text("\n".join(trace) + "\n\n", encoding="utf-8")
    return path
