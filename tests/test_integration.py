import os
import shutil
import sys

import pytest

from protoc_gen_tsd.errors import UnsupportedNestedTypeError
from protoc_gen_tsd.main import EXIT_REQUEST_ERROR, main, run

pytestmark = pytest.mark.skipif(shutil.which("protoc") is None, reason="protoc not installed")


PROTO_CONTENT = """\
syntax = "proto3";

package shop;

enum Status {
    STATUS_UNKNOWN = 0;
    STATUS_OPEN = 1;
}

message OrderItem {
    int32 item_id = 1;
    string item_name = 2;
    double price = 3;
}

message Order {
    int64 order_id = 1;
    repeated OrderItem items = 2;
    map<string, int32> counts = 3;
    Status status = 4;
    oneof payment {
        string card_number = 5;
        bool cash = 6;
    }
}

message Empty {}
"""

NESTED_PROTO_CONTENT = """\
syntax = "proto3";

package shop;

message Outer {
    message Inner {
        int32 id = 1;
    }
    Inner inner = 1;
}
"""


class TestProtocPipeline:
    def test_generates_declarations(self, tmp_path):
        proto_path = tmp_path / "order.proto"
        proto_path.write_text(PROTO_CONTENT)
        out_dir = tmp_path / "out"

        written = run(None, [str(proto_path)], [], str(out_dir))

        assert [os.path.basename(p) for p in written] == [
            "OrderItem.d.ts", "Order.d.ts", "Empty.d.ts", "Status.d.ts",
        ]
        order = (out_dir / "Order.d.ts").read_text()
        assert order == (
            "type Order = Readonly<{\n"
            "  orderId: number;\n"
            "  items: ReadonlyArray<OrderItem>;\n"
            "  counts: Readonly<{ [key: string]: number; }>;\n"
            "  status: Status;\n"
            "}> &\n"
            "  Readonly<\n"
            "    {\n"
            "      cardNumber?: string;\n"
            "      cash?: never;\n"
            "    } |\n"
            "    {\n"
            "      cardNumber?: never;\n"
            "      cash?: boolean;\n"
            "    }\n"
            "  >;\n"
        )
        assert (out_dir / "Empty.d.ts").read_text() == "type Empty = null;\n"
        assert (out_dir / "Status.d.ts").read_text() == (
            "type Status =\n"
            "  | 'STATUS_UNKNOWN'\n"
            "  | 'STATUS_OPEN';\n"
        )

    def test_nested_message_rejected(self, tmp_path):
        proto_path = tmp_path / "nested.proto"
        proto_path.write_text(NESTED_PROTO_CONTENT)
        out_dir = tmp_path / "out"

        with pytest.raises(UnsupportedNestedTypeError):
            run(None, [str(proto_path)], [], str(out_dir))

        assert not out_dir.exists()

    def test_relative_proto_path(self, tmp_path, monkeypatch):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "order.proto").write_text(PROTO_CONTENT)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(sys, "argv", ["protoc-gen-tsd", "--proto", "sub/order.proto", "--out", "out"])

        main()

        assert sorted(os.listdir(tmp_path / "out")) == [
            "Empty.d.ts", "Order.d.ts", "OrderItem.d.ts", "Status.d.ts",
        ]

    def test_out_is_existing_file(self, tmp_path, monkeypatch):
        proto_path = tmp_path / "order.proto"
        proto_path.write_text(PROTO_CONTENT)
        out_file = tmp_path / "out"
        out_file.write_text("taken")
        monkeypatch.setattr(sys, "argv", ["protoc-gen-tsd", "--proto", str(proto_path), "--out", str(out_file)])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == EXIT_REQUEST_ERROR
